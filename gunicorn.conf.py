# gunicorn.conf.py

import os

bind = f"0.0.0.0:{os.environ.get('PORT', '10000')}"
workers = int(os.environ.get('WEB_CONCURRENCY', '2'))

# Thumbnail uploads wait on the AI provider before responding
timeout = 120

accesslog = '-'
errorlog = '-'
proc_name = 'ginywow'
