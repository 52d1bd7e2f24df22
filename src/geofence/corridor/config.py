import configparser
import dataclasses
import os.path

from geofence.corridor import constants
from geofence.corridor.models import CorridorOptions


@dataclasses.dataclass
class Config:
    input_file: str
    output_file: str
    width_km: float
    simplify_tolerance: float
    connection_threshold_m: float
    miter_limit: float
    counter_clockwise: bool

    def show(self):
        print()
        print('Using configuration:')
        for k, v in self.__dict__.items():
            print(f'  + {k}: {v}')

    def options(self) -> CorridorOptions:
        return CorridorOptions(
            simplify_tolerance=self.simplify_tolerance,
            connection_threshold_m=self.connection_threshold_m,
            miter_limit=self.miter_limit,
        )


def config_parser_factory(configuration_file):
    """
    Returns a ConfigParser by reading the specified file.
    """
    if configuration_file is None or not os.path.exists(configuration_file):
        raise ValueError(f'Unable to find configuration file {configuration_file}')
    cfg_parser = configparser.ConfigParser(interpolation=configparser.ExtendedInterpolation())
    cfg_parser.read(configuration_file)
    return cfg_parser


def _get_configuration_value(section, name, value_type, config_parser, overrides):
    """
    Returns a value from the provided config parser; any value for the key that
    is provided in the 'overrides' dictionary will take precedence.
    """
    if overrides.get(name) is not None:
        return value_type(overrides.get(name))

    if value_type is bool:
        return config_parser.getboolean(section, name)
    elif value_type is float:
        return config_parser.getfloat(section, name)
    else:
        return config_parser.get(section, name)


def configuration(config_parser, overrides):
    """
    Returns a valid Config object that is populated from the provided config
    parser, with values overriden with anything provided in 'overrides'.
    """
    config_parser['DEFAULT'] = {
        'output_file': constants.DEFAULT_OUTPUT_FILE,
        'simplify_tolerance': constants.DEFAULT_SIMPLIFY_TOLERANCE,
        'connection_threshold_m': constants.DEFAULT_CONNECTION_THRESHOLD_M,
        'miter_limit': constants.DEFAULT_MITER_LIMIT,
        'counter_clockwise': constants.DEFAULT_COUNTER_CLOCKWISE,
    }
    for section in [constants.SOURCE_SECTION_NAME,
                    constants.DESTINATION_SECTION_NAME,
                    constants.CORRIDOR_SECTION_NAME]:
        if not config_parser.has_section(section):
            config_parser.add_section(section)

    try:
        return Config(
            _get_configuration_value(constants.SOURCE_SECTION_NAME, 'input_file', str, config_parser, overrides),
            _get_configuration_value(constants.DESTINATION_SECTION_NAME, 'output_file', str, config_parser, overrides),
            _get_configuration_value(constants.CORRIDOR_SECTION_NAME, 'width_km', float, config_parser, overrides),
            _get_configuration_value(constants.CORRIDOR_SECTION_NAME, 'simplify_tolerance', float, config_parser, overrides),
            _get_configuration_value(constants.CORRIDOR_SECTION_NAME, 'connection_threshold_m', float, config_parser, overrides),
            _get_configuration_value(constants.CORRIDOR_SECTION_NAME, 'miter_limit', float, config_parser, overrides),
            _get_configuration_value(constants.CORRIDOR_SECTION_NAME, 'counter_clockwise', bool, config_parser, overrides),
        )
    except (configparser.Error, ValueError) as e:
        raise ValueError(f'Unable to read the configuration: {e}') from e


def validate(configuration):
    """
    Validates each value in the configuration.
    """
    validations = [
        ['input_file', lambda f: os.path.exists(f), 'The input_file does not exist.'],
        ['output_file', lambda f: bool(f), 'The output_file must not be blank.'],
        ['width_km', lambda w: w > 0, 'The width_km must be positive.'],
        ['simplify_tolerance', lambda t: t >= 0, 'The simplify_tolerance must not be negative.'],
        ['connection_threshold_m', lambda t: t > 0, 'The connection_threshold_m must be positive.'],
        ['miter_limit', lambda m: m >= 1, 'The miter_limit must be at least 1.'],
    ]
    errors = [msg for name, fn, msg in validations if not fn(getattr(configuration, name))]
    return len(errors) == 0, errors
