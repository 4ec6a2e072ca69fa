import os

from writo import create_app
from writo.config import DevConfig, ProdConfig

config_class = ProdConfig if os.getenv("FLASK_ENV") == "production" else DevConfig
app = create_app(config_class)

if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    debug = os.getenv("DEBUG", "true").strip().lower() in {"1", "true", "yes", "on"}
    app.run(host=host, port=port, debug=debug, threaded=True)
