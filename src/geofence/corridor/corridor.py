import configparser
import logging
import os.path
import sys

from funcy import decorator
from pyfiglet import Figlet
from rich.prompt import Confirm, Prompt

from geofence.corridor import config
from geofence.corridor import constants
from geofence.corridor import geojson
from geofence.corridor.generator import generate
from geofence.corridor.models import CorridorCollection


CONSOLE_FORMAT = "%(message)s"
LOGFILE_FORMAT = "%(asctime)s|%(levelname)s|%(name)s|%(message)s"

def init_logging(logfile=constants.LOG_FILE):
    logger = logging.getLogger('geofence')
    logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    logfile_handler = logging.FileHandler(logfile, "w")
    logfile_handler.setLevel(logging.DEBUG)
    logfile_handler.setFormatter(logging.Formatter(LOGFILE_FORMAT))
    logger.addHandler(logfile_handler)

@decorator
def log(call):
    logging.getLogger("geofence").info(call._func.__name__)
    return call()

def banner():
    """
    Displays the name of this utility using incredible ASCII-art.
    """
    f = Figlet(font='slant')
    return f.renderText('corridor')

def init_config(configuration_file):
    """
    Prompts the user for configuration values and then creates a valid configuration file.
    """
    print("""This utility will create a corridor configuration file by prompting """
          """you for values for each of the configuration parameters.""")
    print()
    if not configuration_file:
        configuration_file = Prompt.ask("configuration file name", default="corridor.ini")
    else:
        print(f'Creating configuration file {configuration_file}')
        print()

    if (os.path.exists(configuration_file)):
        print(f'WARNING: The {configuration_file} already exists.')
        overwrite = Confirm.ask("Overwrite?")
        if not overwrite:
            print('Not overwriting existing file. Exiting.')
            sys.exit(1)

    cfg_parser = configparser.ConfigParser()

    print()
    print(f'{constants.SOURCE_SECTION_NAME} Parameters')
    print('--------------------------------------------------')
    cfg_parser.add_section(constants.SOURCE_SECTION_NAME)
    cfg_parser.set(constants.SOURCE_SECTION_NAME, "input_file", Prompt.ask("Routes file (JSON or GeoJSON)", default="routes.json"))

    print()
    print(f'{constants.DESTINATION_SECTION_NAME} Parameters')
    print('--------------------------------------------------')
    cfg_parser.add_section(constants.DESTINATION_SECTION_NAME)
    cfg_parser.set(constants.DESTINATION_SECTION_NAME, "output_file", Prompt.ask("Output GeoJSON file", default=constants.DEFAULT_OUTPUT_FILE))

    print()
    print(f'{constants.CORRIDOR_SECTION_NAME} Parameters')
    print('--------------------------------------------------')
    cfg_parser.add_section(constants.CORRIDOR_SECTION_NAME)
    cfg_parser.set(constants.CORRIDOR_SECTION_NAME, "width_km", Prompt.ask("Corridor width (km)", default="0.1"))
    cfg_parser.set(constants.CORRIDOR_SECTION_NAME, "simplify_tolerance", Prompt.ask("Simplify tolerance (degrees)", default=str(constants.DEFAULT_SIMPLIFY_TOLERANCE)))
    cfg_parser.set(constants.CORRIDOR_SECTION_NAME, "connection_threshold_m", Prompt.ask("Route connection threshold (m)", default=str(constants.DEFAULT_CONNECTION_THRESHOLD_M)))
    cfg_parser.set(constants.CORRIDOR_SECTION_NAME, "miter_limit", Prompt.ask("Miter limit", default=str(constants.DEFAULT_MITER_LIMIT)))
    cfg_parser.set(constants.CORRIDOR_SECTION_NAME, "counter_clockwise", Prompt.ask("Counter-clockwise rings? (True/False)", default=str(constants.DEFAULT_COUNTER_CLOCKWISE)))

    print()
    print(f'Saving new configuration: {configuration_file}')
    with open(configuration_file, "tw") as file:
        cfg_parser.write(file)

    return configuration_file

@log
def read_routes(configuration: config.Config) -> list:
    return geojson.read_routes(configuration.input_file)

@log
def build_corridors(configuration: config.Config, routes: list) -> CorridorCollection:
    return generate(routes, configuration.width_km, configuration.options())

@log
def write_corridors(configuration: config.Config, collection: CorridorCollection) -> str:
    return geojson.write_feature_collection(
        collection,
        configuration.output_file,
        counter_clockwise=configuration.counter_clockwise,
    )

def process(configuration: config.Config) -> CorridorCollection:
    """
    Reads the configured routes, generates their corridors and writes them
    as a GeoJSON FeatureCollection.
    """
    valid, errors = config.validate(configuration)
    if not valid:
        raise ValueError(' '.join(errors))

    routes = read_routes(configuration)
    collection = build_corridors(configuration, routes)
    write_corridors(configuration, collection)

    summarize_results(routes, collection)
    return collection

def summarize_results(routes, collection: CorridorCollection) -> None:
    logger = logging.getLogger('geofence')
    logger.info('')
    logger.info('Processing summary')
    logger.info('==================')
    logger.info(f'Routes read:          {len(routes)}')
    logger.info(f'Corridors generated:  {len(collection)}')
    for feature in collection:
        logger.info(f'  + corridor {feature.route_index}: {feature.polygon.vertices} vertices')
