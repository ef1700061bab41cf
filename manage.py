# Filepath: manage.py

import sys
from ginywow import create_app
from ginywow.models import NewsletterSubscription, ShortUrl

app = create_app()

USAGE = """Usage:
  python manage.py subscribers           List active newsletter subscribers
  python manage.py link-stats [code]     Show click counts for short links"""


def list_subscribers():
    with app.app_context():
        subscribers = NewsletterSubscription.query.filter_by(is_active='true') \
            .order_by(NewsletterSubscription.subscription_date.asc()).all()
        for sub in subscribers:
            print(f"{sub.email}\t{sub.source or '-'}\t{sub.subscription_date:%Y-%m-%d}")
        print(f"{len(subscribers)} active subscriber(s).")


def link_stats(short_code=None):
    with app.app_context():
        query = ShortUrl.query
        if short_code:
            query = query.filter_by(short_code=short_code)
        links = query.order_by(ShortUrl.click_count.desc()).all()
        if not links:
            print("Error: No short links found.")
            return
        for link in links:
            print(f"{link.short_code}\t{link.url_type}\t{link.click_count}\t{link.original_url}")


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print(USAGE)
    elif sys.argv[1] == 'subscribers':
        list_subscribers()
    elif sys.argv[1] == 'link-stats':
        link_stats(sys.argv[2] if len(sys.argv) > 2 else None)
    else:
        print(f"Unknown command: {sys.argv[1]}")
        print(USAGE)
