import sys

import click

from geofence.corridor import config
from geofence.corridor import corridor


@click.group(epilog="For detailed help on each command, run: corridor COMMAND --help")
def cli():
    """The corridor utility builds flat-capped geofence corridor polygons
    around route paths and writes them as a GeoJSON FeatureCollection."""
    pass

@cli.command()
@click.option('-c', '--config', help='Path to configuration file to create or replace')
def init(config):
    """Populates a configuration file based on user input."""
    click.echo(corridor.banner())
    config = corridor.init_config(config)
    click.echo(f'Initialized the corridor configuration file {config}')

@cli.command()
@click.option('-c', '--config', 'config_filename', help='Path to configuration file to display', required=True)
def info(config_filename):
    """Summarizes the contents of a configuration file."""
    click.echo(corridor.banner())
    try:
        configuration = config.configuration(config.config_parser_factory(config_filename), {})
    except ValueError as e:
        click.echo(f'\nUnable to read configuration: {e}')
        sys.exit(1)
    configuration.show()

@cli.command()
@click.option('-c', '--config', 'config_filename', help='Path to configuration file', required=True)
@click.option('-w', '--width', 'width_km', type=float, help='Corridor width in kilometers.')
@click.option('-i', '--input', 'input_file', help='Routes file, overriding the configuration.')
@click.option('-o', '--output', 'output_file', help='Output GeoJSON file, overriding the configuration.')
@click.option('--ccw', is_flag=True, help='Write counter-clockwise polygon rings.')
def generate(config_filename, width_km, input_file, output_file, ccw):
    """Generates corridors for the routes named in the configuration file."""
    click.echo(corridor.banner())
    overrides = {
        'width_km': width_km,
        'input_file': input_file,
        'output_file': output_file,
        'counter_clockwise': True if ccw else None,
    }
    try:
        configuration = config.configuration(config.config_parser_factory(config_filename), overrides)
        corridor.init_logging()
        corridor.process(configuration)
    except Exception as e:
        click.echo("\nUnable to generate corridors: " + str(e))
        sys.exit(1)
    click.echo(f'Generated corridors using the configuration file {config_filename}')

if __name__ == "__main__":
    cli()
