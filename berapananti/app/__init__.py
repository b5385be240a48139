"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS

from berapananti.app.api.routes import api_bp
from berapananti.config import Settings, get_settings
from berapananti.core.inflation_sheet import InflationSheetError, load_inflation_sheet
from berapananti.core.rate_book import RateBook, load_rate_book
from berapananti.core.rate_table import RateTable
from berapananti.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def _load_monthly_inflation(path: Optional[str]) -> Optional[RateTable]:
    if not path:
        return None
    try:
        return load_inflation_sheet(path)
    except InflationSheetError as exc:
        # Calculators that need the sheet answer 503 until it is fixed.
        logger.warning("inflation_sheet_unavailable", path=path, error=str(exc))
        return None


def create_app(
    settings: Optional[Settings] = None,
    rate_book: Optional[RateBook] = None,
    monthly_inflation: Optional[RateTable] = None,
) -> Flask:
    """Build the Flask app instance.

    Rate data is loaded once here and shared read-only by every request;
    tests inject their own rate book or monthly table instead.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

    app = Flask(__name__)
    CORS(
        app,
        resources={r"/api/*": {"origins": settings.CORS_ORIGINS}},
        supports_credentials=True,
    )

    if rate_book is None:
        rate_book = load_rate_book(settings.RATE_BOOK_PATH)
    if monthly_inflation is None:
        monthly_inflation = _load_monthly_inflation(settings.INFLATION_SHEET_PATH)

    app.extensions["berapananti"] = {
        "settings": settings,
        "rate_book": rate_book,
        "monthly_inflation": monthly_inflation,
    }
    app.register_blueprint(api_bp, url_prefix="/api")

    logger.info(
        "app_created",
        project=settings.PROJECT_NAME,
        inflation_source="sheet" if monthly_inflation is not None else "builtin",
    )
    return app
