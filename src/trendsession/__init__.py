"""
trendsession - Signs into a Google account over HTTP for Google Trends access.

Flow:
1. seed     - Collect anonymous google.com cookies
2. login    - Replay the login form with the configured credentials
3. verify   - Answer the recovery email challenge when asked
4. finalize - Let Google set session cookies and pin the Trends locale
"""

__version__ = "1.0.0"
__author__ = "trendsession team"
