import os
import tempfile

# Settings are read at import time, so the test environment is fixed here
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_DIR"] = os.path.join(tempfile.gettempdir(), "store_locator_test_logs")
os.environ["GOOGLE_MAPS_API_KEY"] = ""
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin"
