from neatmark.run.config   import Config
from neatmark.run.logger   import setup_logger
from neatmark.run.parallel import MutationRequest, register_concurrently

__all__ = ['Config', 'MutationRequest', 'register_concurrently', 'setup_logger']
