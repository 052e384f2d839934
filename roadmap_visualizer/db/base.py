# roadmap_visualizer/db/base.py

from sqlalchemy.orm import declarative_base

Base = declarative_base()

# IMPORTANT: import all model modules so they register with Base.metadata
# before create_all() runs.

from roadmap_visualizer.db import models  # noqa: E402,F401  (imported for the side-effect)
