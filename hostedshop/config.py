import os

from dotenv import load_dotenv

# .env values must be in the environment before the classes below are built
load_dotenv()


class BaseConfig:
    HOSTEDSHOP_WSDL = os.getenv('HOSTEDSHOP_WSDL', 'https://api.hostedshop.dk/service.wsdl')
    HOSTEDSHOP_USER = os.getenv('HOSTEDSHOP_USER', '')
    HOSTEDSHOP_PASS = os.getenv('HOSTEDSHOP_PASS', '')
    HOSTEDSHOP_SHOP_ID = os.getenv('HOSTEDSHOP_SHOP_ID', '1434')
    HOSTEDSHOP_ASSET_HOST = os.getenv('HOSTEDSHOP_ASSET_HOST', 'hstatic.dk')
    HOSTEDSHOP_TIMEOUT = int(os.getenv('HOSTEDSHOP_TIMEOUT', '10'))
    # Skip the *_SetFields calls a new client issues for users, orders and products
    HOSTEDSHOP_APPLY_DEFAULT_FIELDS = os.getenv('HOSTEDSHOP_APPLY_DEFAULT_FIELDS', 'true').lower() == 'true'

class DevConfig(BaseConfig):
    DEBUG = True
    ENV = 'development'

class ProdConfig(BaseConfig):
    DEBUG = False
    ENV = 'production'


def get_config(config_name: str | None = None):
    """Pick the config class for ``config_name`` or the ``ENV`` variables."""
    env = config_name or os.getenv('ENV') or os.getenv('FLASK_ENV') or 'production'
    return DevConfig if env == 'development' else ProdConfig
