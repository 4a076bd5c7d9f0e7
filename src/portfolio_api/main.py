from portfolio_api.api.fastapi import create_app
from portfolio_api.app import setup_logging

setup_logging()

app = create_app()
