import pytest

from dataseries.core import SeriesConfig, configure_logging


@pytest.fixture(autouse=True)
def _series_logging():
    # get_logger() leaves structlog alone, so pin a known setup per test
    configure_logging(SeriesConfig())
    yield
