"""Application-level constants."""

from pathlib import Path

# Keys for serialization
ORIGINAL_INDEX_KEY = "og_index"
TITLE_KEY = "title"
HUMAN_CATEGORY_KEY = "human_category_id"
TOP_CANDIDATES_KEY = "top_candidates"

# Column names for predictions
PRED_ID_COL = "Pred_Category_Id"
PRED_PATH_COL = "Pred_Category_Path"
PRED_PROBABILITY_COL = "Pred_Probability"
PRED_RANKED_IDS_COL = "Pred_Ranked_Ids"

# Output filenames
PREDICTIONS_FILENAME = "predictions.json"
METRICS_FILENAME = "metrics.json"
ROOT_TABLE_FILENAME = "root_category_table.csv"
CONFIG_SNAPSHOT_FILENAME = "config.resolved.json"
DATA_FINGERPRINT_FILENAME = "data_fingerprint.json"

# Output directory structure
OUTPUT_ROOT = Path("outputs")
LOG_FILENAME = "run.log"
