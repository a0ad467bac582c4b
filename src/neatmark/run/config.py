import configparser
import logging
import os

from neatmark.errors import ConfigurationError

# Largest identifier a counter will hand out (signed 64-bit range)
DEFAULT_MAX_IDENTIFIER = 2**63 - 1

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

class Config:

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create an empty Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config with defaults; 'num_inputs'
                         and 'num_outputs' must then be set manually.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.num_inputs  = None
            self.num_outputs = None

            self.first_innovation_id   = 0
            self.max_identifier        = DEFAULT_MAX_IDENTIFIER
            self.seed_initial_topology = True

            self.num_jobs = 1

            self.log_level = 'WARNING'
            self.log_file  = None

            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for '{key}' in section [{section}]: {e}") from e

        # [POPULATION_INIT]

        # The number of input neurons, through which the network receives inputs.
        self.num_inputs = get_value('POPULATION_INIT', 'num_inputs', int)

        # The number of output neurons, to which the network delivers outputs.
        self.num_outputs = get_value('POPULATION_INIT', 'num_outputs', int)

        # [INNOVATION] (optional section)

        # The innovation number handed out to the very first innovation.
        self.first_innovation_id = get_value('INNOVATION', 'first_innovation_id', int, default=0)

        # The largest neuron ID or innovation number the counters may assign.
        # Asking for more raises an IdentifierOverflowError.
        self.max_identifier = get_value('INNOVATION', 'max_identifier', int, default=DEFAULT_MAX_IDENTIFIER)

        # Whether a new innovation tracker registers the innovations of the
        # minimal initial topology (bias, inputs, outputs, fully connected).
        self.seed_initial_topology = get_value('INNOVATION', 'seed_initial_topology', bool, default=True)

        # [PARALLEL] (optional section)

        # Number of threads used when registering innovations in bulk.
        #   1:  serial registration
        #  >1:  use specified number of threads
        #  -1:  use as many threads as CPU cores
        self.num_jobs = get_value('PARALLEL', 'num_jobs', int, default=1)

        # [LOGGING] (optional section)

        # Threshold for messages from the 'neatmark' logger.
        # Allowed values: DEBUG, INFO, WARNING, ERROR, CRITICAL
        self.log_level = get_value('LOGGING', 'log_level', str, default='WARNING')

        # If set, log messages are also written to this file.
        self.log_file = get_value('LOGGING', 'log_file', str, default=None)

        self.validate()

    def validate(self):
        """
        Check that the configuration values are usable.
        Raises ConfigurationError on the first invalid value found.
        """
        # only 'log_file' may be None
        for name in ('num_inputs', 'num_outputs', 'first_innovation_id', 'max_identifier',
                     'seed_initial_topology', 'num_jobs', 'log_level'):
            if getattr(self, name) is None:
                raise ConfigurationError(f"'{name}' must be specified")

        for name in ('num_inputs', 'num_outputs'):
            value = getattr(self, name)
            if value < 0:
                raise ConfigurationError(f"'{name}' must be non-negative, got {value}")

        if self.first_innovation_id < 0:
            raise ConfigurationError(f"'first_innovation_id' must be non-negative, got {self.first_innovation_id}")
        if self.max_identifier < self.first_innovation_id:
            raise ConfigurationError("'max_identifier' must not be smaller than 'first_innovation_id'")

        # neuron IDs 0 .. num_inputs + num_outputs are taken by the initial topology
        first_hidden_id = 1 + self.num_inputs + self.num_outputs
        if self.max_identifier < first_hidden_id:
            raise ConfigurationError(f"'max_identifier' must be at least {first_hidden_id} "
                                     f"to leave room for a hidden neuron, got {self.max_identifier}")
        if self.num_jobs == 0 or self.num_jobs < -1:
            raise ConfigurationError(f"'num_jobs' must be -1 or a positive integer, got {self.num_jobs}")

        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level '{self.log_level}'")

    @property
    def log_level_value(self) -> int:
        """The numeric logging level matching 'log_level'."""
        return logging.getLevelName(self.log_level.upper())
