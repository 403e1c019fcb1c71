"""
Screenshot API - capture screenshots and PDFs of web pages with a headless browser
"""

__version__ = "1.0.0"
