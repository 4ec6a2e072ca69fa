# writo/extensions.py
from flask_cors import CORS

from .config import Config
from .storage.data_dir import DataDirectory
from .storage.json_db import JsonDb

cors = CORS()

# Shared collection store; init_app() rebinds its data directory to app.config
db = JsonDb(DataDirectory(Config.DATA_DIR, Config.LOCAL_DATA_DIR))
