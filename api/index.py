from mangum import Mangum
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from splitledger.api import app, settings
from splitledger.config import configure_logging

configure_logging(settings)

app.root_path = "/api"

handler = Mangum(app)
