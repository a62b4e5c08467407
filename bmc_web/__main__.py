import logging

from dotenv import load_dotenv

from bmc_web.app_factory import create_app
from bmc_web.config.ini_config import IniConfig

if __name__ == "__main__":
    load_dotenv()
    settings = IniConfig.from_env_or_default().load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config["DEBUG"])
