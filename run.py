"""WSGI entry point for the customlists application."""

import os
from customlists import create_app

# CUSTOMLISTS_CONFIG selects the configuration class
config_name = os.environ.get('CUSTOMLISTS_CONFIG', 'development')
app = create_app(config_name)

if __name__ == '__main__':
    # Development server - use gunicorn in production
    debug = os.environ.get('FLASK_DEBUG', '0') == '1'
    # No reloader: it would start a second process with its own update timer
    app.run(host='127.0.0.1', port=5000, debug=debug, use_reloader=False)
