"""
Flickr Originals Renamer

Matches original image files to the photos of a Flickr set by capture time
and renames each original after its Flickr title.
"""

__version__ = "1.0.0"

from .config import Config
from .flickr_client import FlickrClient
from .reconciler import reconcile
from .planner import apply_plans, plan
from .renamer import OriginalsRenamer
from .reporter import RenameReporter

__all__ = [
    'Config',
    'FlickrClient',
    'OriginalsRenamer',
    'RenameReporter',
    'apply_plans',
    'plan',
    'reconcile',
]
