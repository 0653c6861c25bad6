from .config import config
from .doctor import doctor
from .features import features
from .image_protocol import image_protocol
from .init import init
from .install import install
from .launch import launch
from .log import log
from .version import version
