import code
import logging

from nodelib import plumbing as p
from nodelib.plumbing import args, services, snap
from nodelib.plumbing.common import *
from nodelib.tasks import services as tasks


ctx = Context.background()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    code.interact(local=globals())
