"""Version information for artifact-deploy package"""

__version__ = "0.1.0"
__version_info__ = (0, 1, 0)
__author__ = "vistart"
__email__ = "i@vistart.me"
__license__ = "MIT"
__copyright__ = "Copyright 2025 vistart"
