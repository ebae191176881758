import click
import logging
import sys

from extbf.defaults import default_config_with_updates, make_interpreter
from extbf.errors import BFError
from extbf.extensions import extensions

logging.basicConfig(format='%(asctime)s %(message)s')
logger = logging.getLogger('extbf')

def open_program(path):
    try:
        return open(path, 'rb')
    except OSError as e:
        logger.error(e)
        raise click.FileError(path, hint=e.strerror)

@click.command()
@click.option('--input-file', '-i', default='example.bf', type=str, help='Path to a brainfuck program')
@click.option('--config', default='', type=str, help='Configuration as key=value pairs separated by commas')
@click.option('--config-file', default=None, type=str, help='YAML file with configuration')
@click.option('--debug', is_flag=True, help='Print a trace of every executed instruction to stderr')
@click.option('--extension', '-e', multiple=True, type=click.Choice(sorted(extensions)), help='Enable an optional instruction')
@click.option('--cell-type', default=None, type=str, help='numpy unsigned integer type of a tape cell, e.g. uint8')
@click.option('--log-level', default=None, type=str, help='The threshold for what messages will be logged. One of DEBUG, INFO, WARNING, ERROR')
@click.pass_context
def run(ctx, input_file, config, config_file, debug, extension, cell_type, log_level):
    try:
        config = default_config_with_updates(config, config_file)
    except BFError as e:
        logger.error(e)
        ctx.exit(1)

    if debug:
        config['debug'] = True
    if extension:
        config['extensions'] = list(config['extensions']) + list(extension)
    if cell_type:
        config['cell-type'] = cell_type
    if log_level:
        config['log-level'] = log_level

    try:
        logger.setLevel(str(config['log-level']).upper())
    except ValueError as e:
        logger.error(e)
        ctx.exit(1)

    with open_program(input_file) as f:
        try:
            interpreter = make_interpreter(f, config,
                                           input_stream=sys.stdin,
                                           output_stream=sys.stdout,
                                           trace_stream=sys.stderr)
            interpreter.run()
        except BFError as e:
            logger.error(e)
            ctx.exit(1)

if __name__ == '__main__':
    run()
