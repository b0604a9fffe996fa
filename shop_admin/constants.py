# shop_admin/constants.py

APP_NAME = "Shop Admin"
ORG_NAME = "GOWELO SHOP"

# Local client storage
DATA_DIR = "data"
DB_FILE_NAME = "shop_admin.db"
TABLE_SCHEMA_VERSION = "schema_version"
SCHEMA_VERSION = "1"

# Backend
DEFAULT_API_BASE_URL = "http://localhost:5000/api"
DEFAULT_HTTP_TIMEOUT = 15.0

# Display
CURRENCY = "MK"
LOW_STOCK_THRESHOLD = 5
EXPIRY_WARNING_DAYS = 7
TREND_WINDOW_DAYS = 7
QUICK_QUANTITIES = (1, 5, 10)

# Report exports
EXPORT_EXCEL_FILE = "GOWELO_SHOP_Report.xlsx"
EXPORT_PDF_FILE = "GOWELO_SHOP_Report.pdf"
