import uvicorn

from api.app import create_app
from core.markdraft.config import apply_settings, load_config
from core.settings import get_settings

settings = get_settings()
config = apply_settings(load_config(settings.config_path), settings)
app = create_app(config)

if __name__ == "__main__":
    uvicorn.run(app, host=config.api.host, port=config.api.port)
