"""
WSGI config for pilot_logbook project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'pilot_logbook.settings_prod')

application = get_wsgi_application()
