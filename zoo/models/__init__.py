# Zoo backend: document store models
# Import all models here for SQLAlchemy discovery

from zoo.models.space import Space          # noqa
from zoo.models.space_log import SpaceLog   # noqa
from zoo.models.staff import Staff          # noqa
from zoo.models.ticket import Ticket        # noqa
