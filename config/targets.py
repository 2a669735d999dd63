# Target site URLs and selectors
#
# IMPORTANT: DOM selectors belong to the sites under test. Update them here,
# never inside page objects, when a target changes its markup.

# ERP login and dashboard (CSS selectors)
ERP_SELECTORS = {
    'username_input': '#username',
    'password_input': '#password',
    'login_button': '#login-btn',
    'error_message': '.error-message',
    'forgot_password_link': '#forgot-password',
    'remember_me_checkbox': '#remember-me',
    'company_select': '#company-select',
    'welcome_message': '.welcome-message',
    'logout_link': '#logout',
}

# Public roadmap website
ROADMAP_CONFIG = {
    'home_url': 'https://roadmap.sh/',
    'data_analyst_url': 'https://roadmap.sh/data-analyst',
    'login_url': 'https://roadmap.sh/login',
    'data_analyst_path': '/data-analyst',
    'data_analyst_title': 'Data Analyst Roadmap',
    'auth_url_keywords': ('login', 'signin', 'auth', 'account'),
    'selectors': {
        'page_title': 'h1',
        'main_header': 'header h1',
        'data_analyst_link': 'a[href="/data-analyst"]',
        'roadmap_container': '[data-testid="roadmap-container"]',
        'login_link': 'a[href="/login"]',
        'email_input': 'input[type="email"]',
        'password_input': 'input[type="password"]',
        'submit_button': 'button[type="submit"]',
    },
}

# Google search scraper
GOOGLE_CONFIG = {
    'url': 'https://www.google.com',
    'window_size': (1366, 768),
    'user_agent': (
        'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
        '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
    ),
    'accept_language': 'es-ES,es;q=0.9,en;q=0.8',
    'selectors': {
        'search_input': 'textarea[name="q"], input[name="q"]',
        'search_results': '#search',
        'result_titles': '#search h3',
        'result_links': '#search a[href^="http"]',
        'result_stats': '#result-stats, .LHJvCe',
        'suggestions': '[role="listbox"] li',
        # Cookie banner buttons, tried in order
        'cookie_accept': ['#L2AGLb', '//button[contains(., "Aceptar todo")]', '//button[contains(., "Accept all")]'],
    },
}
