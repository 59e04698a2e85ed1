# motor_search/config.py
from dotenv import load_dotenv
import os

load_dotenv()

# Search parameters
SEARCH_THRESHOLD = float(os.getenv("SEARCH_THRESHOLD", "0.4"))
MAX_RESULTS = int(os.getenv("MAX_RESULTS", "50"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# File names
INVENTORY_CSV = os.getenv("INVENTORY_CSV", "motors.csv")
OUTPUT_CSV = os.getenv("OUTPUT_CSV", "search_results.csv")
