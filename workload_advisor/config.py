"""Configuration for the workload advisor, read from the environment."""
import os

# Scoring service
SCORING_SERVICE_URL = os.environ.get("SCORING_SERVICE_URL", "http://localhost:5000")
OPTIMIZE_PATH = os.environ.get("OPTIMIZE_PATH", "/optimize")
SIMULATION_SERVICE_URL = os.environ.get(
    "SIMULATION_SERVICE_URL", f"{SCORING_SERVICE_URL}/simulate"
)

# Same-origin advisor app, used for the offline mock
ADVISOR_APP_URL = os.environ.get("ADVISOR_APP_URL", "http://localhost:8000")
MOCK_OPTIMIZE_PATH = os.environ.get("MOCK_OPTIMIZE_PATH", "/api/mock/optimize")
MOCK_DELAY = float(os.environ.get("MOCK_DELAY", "1.5"))


def optimize_url(base_url: str = SCORING_SERVICE_URL) -> str:
    """Return the full URL of the scoring service's optimize endpoint."""
    return f"{base_url.rstrip('/')}{OPTIMIZE_PATH}"


def mock_optimize_url(app_url: str = ADVISOR_APP_URL) -> str:
    """Return the full URL of the advisor app's mock optimize route."""
    return f"{app_url.rstrip('/')}{MOCK_OPTIMIZE_PATH}"
