import os

# --- Configuration Constants ---
# Fixed column roles of the source table (1-indexed, as they appear in Excel)
SOURCE_COLUMN_A = 7  # amount after adjustment
SOURCE_COLUMN_B = 8  # adjustment value

# Labels written into the augmented table
DERIVED_COLUMN_LABEL = "Total Value before Taxing"
TOTALS_LABEL = "Total"

# Presentation hints (RGB hex, openpyxl style)
TOTALS_FILL = "90EE90"  # light green
DERIVED_FILL = "5F9EA0"  # cadet blue
DERIVED_NUMBER_FORMAT = "0.00"

# Posted field names
CELL_FIELD_PREFIX = "cell-"
CELL_FIELD_PATTERN = r"^cell-(\d+)-(\d+)$"
READONLY_FIELD_PREFIX = "readonly-"
FILE_NAME_FIELD = "fileName"

# Session store keys
UPLOADED_FILE_KEY = "UploadedFile"
FILE_NAME_KEY = "FileName"

# Download
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
DEFAULT_DOWNLOAD_NAME = "edited.xlsx"

# User-facing messages
FILE_NOT_SELECTED = "File not selected."
NO_FILE_UPLOADED = "No file uploaded."

LOG_LEVEL = os.environ.get("TAXSHEET_LOG_LEVEL", "INFO").upper()
