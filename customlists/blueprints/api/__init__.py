"""API Blueprint for customlists REST endpoints."""

from flask import Blueprint

api_bp = Blueprint('api', __name__)

from customlists.blueprints.api import routes  # noqa: E402, F401
from customlists.blueprints.api import customlists  # noqa: E402, F401
