from pathlib import Path

# Repo-root conventional directories/files (overrideable via CLI flags / detector.yaml)
CONFIG_DIR = Path("configs")
DETECTOR_CONFIG_FILE = CONFIG_DIR / "detector.yaml"

DATA_DIR = Path("dataset")

# Official Google product taxonomy with ids
DEFAULT_TAXONOMY_URL = "https://www.google.com/basepages/producttype/taxonomy-with-ids.en-US.txt"

# Environment overrides for the taxonomy source
ENV_TAXONOMY_URL = "TAXONOMY_URL"
ENV_TAXONOMY_FILE = "TAXONOMY_FILE"
