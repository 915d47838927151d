import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from backend.tables import create_schema  # noqa: E402
from core.dependencies import DependencyContainer  # noqa: E402

# Create the LightBnB schema in the configured database file
with DependencyContainer() as container:
    tables = create_schema(container.store, container.logger)
    print(f"Initialized {container.db_path}: {', '.join(tables)}")
