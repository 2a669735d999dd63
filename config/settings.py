# Suite settings for the PaisaERP / roadmap E2E test suite
"""
Environment-driven configuration for the browser test suite.

Every value can be overridden through an environment variable so the same
suite runs locally, in CI and against remote targets without code changes.
"""

import os

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def is_truthy(value):
    """Interpret an environment string as a boolean flag."""
    if value is None:
        return False
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


# Environment Configuration
TEST_CONFIG = {
    # Browser configuration
    'browser': os.environ.get('TEST_BROWSER', 'chrome').lower(),
    'headless': is_truthy(os.environ.get('TEST_HEADLESS', 'true')),
    'window_size': (1280, 720),

    # Timeouts (seconds)
    'page_load_timeout': int(os.environ.get('TEST_PAGE_LOAD_TIMEOUT', 30)),
    'action_timeout': int(os.environ.get('TEST_ACTION_TIMEOUT', 10)),
    'navigation_timeout': int(os.environ.get('TEST_NAVIGATION_TIMEOUT', 15)),
    'reachability_timeout': 5,

    # Network resilience settings
    'retry_attempts': 3,
    'retry_delay_base': 2,  # seconds, for exponential backoff

    # Test data and artifacts
    'data_dir': os.environ.get('TEST_DATA_DIR', os.path.join(PROJECT_ROOT, 'tests', 'data')),
    'artifacts_dir': os.environ.get('ARTIFACTS_DIR', os.path.join(PROJECT_ROOT, 'test-results')),

    # 'erp' runs the ERP and roadmap suites, 'google' runs only the search suites
    'test_type': os.environ.get('TEST_TYPE', 'erp').lower(),
}

# ERP target
ERP_CONFIG = {
    'base_url': os.environ.get('ERP_BASE_URL', 'http://localhost:3000'),
    'login_path': '/login',
    'dashboard_path': '/dashboard',
    'logout_path': '/logout',
    'user_environment': 'test',  # users-test.json backs the user fixtures
}

# Logging Configuration
LOGGING_CONFIG = {
    'level': os.environ.get('TEST_LOG_LEVEL', 'INFO').upper(),
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}


def get_target_environment():
    """Name of the environment the suite runs as ('test' unless overridden)."""
    return os.environ.get('TEST_ENVIRONMENT', 'test')


def get_erp_base_url():
    """Base URL of the ERP under test, without a trailing slash."""
    return ERP_CONFIG['base_url'].rstrip('/')


def get_screenshot_dir():
    """Directory that receives page screenshots."""
    return os.path.join(TEST_CONFIG['artifacts_dir'], 'screenshots')
