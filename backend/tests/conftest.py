import os

# Use in-memory sqlite for tests. Must be set before anything imports
# speedmap.db, which builds the engine at import time.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("SIMULATOR_SEED", "7")
