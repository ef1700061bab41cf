# run.py

from ginywow import create_app

app = create_app()

if __name__ == '__main__':
    # Port is handled by Gunicorn in production
    app.run(debug=False)
