from pathlib import Path
from functools import lru_cache

from .config import get_settings
from .services.plan_catalog import PlanCatalog, load_catalog

PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"
CATALOG_PATH = DATA_DIR / "plans.json"

@lru_cache(maxsize=1)
def get_catalog() -> PlanCatalog:
    path = get_settings().catalog_path or CATALOG_PATH
    if not Path(path).exists():
        raise FileNotFoundError(f"Plan catalog not found at {path}")
    return load_catalog(path)
