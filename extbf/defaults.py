"""Configuration of the interpreter and the builder that applies it."""

import ast
import logging
import re

import yaml

from extbf.errors import ConstructionError
from extbf.extensions import make_instruction
from extbf.interpreter import Interpreter
from extbf.state import DEFAULT_CELL_TYPE

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'debug': False,
    'cell-type': DEFAULT_CELL_TYPE,
    'extensions': [],
    'log-level': 'WARNING'
}

def parse_config_string(config_str):
    config = {}
    # commas inside values, e.g. lists, do not start a new statement
    for config_statement in re.split(r',(?=\s*[\w-]+\s*=)', config_str):
        if config_statement:
            try:
                key, value = config_statement.split('=', 1)
                config[key.strip()] = ast.literal_eval(value.strip())
            except (ValueError, SyntaxError) as e:
                raise ConstructionError(f'bad config statement {config_statement!r}') from e
    return config

def load_config_file(path):
    try:
        with open(path, 'r') as f:
            config = yaml.safe_load(f)
    except OSError as e:
        raise ConstructionError(f'failed to read config file: {e}') from e
    except yaml.YAMLError as e:
        raise ConstructionError(f'config file {path} is not valid YAML: {e}') from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConstructionError(f'config file {path} must contain a mapping')
    return config

def default_config_with_updates(config_str='', config_file=None):
    config = dict(DEFAULT_CONFIG)

    updates = {}
    if config_file:
        updates.update(load_config_file(config_file))
    updates.update(parse_config_string(config_str or ''))

    unknown = set(updates) - set(DEFAULT_CONFIG)
    if unknown:
        raise ConstructionError(f'unknown config keys: {", ".join(sorted(unknown))}')

    config.update(updates)
    if isinstance(config['extensions'], str):
        config['extensions'] = [config['extensions']]
    return config

def make_interpreter(code, config=None, input_stream=None, output_stream=None, trace_stream=None):
    if config is None:
        config = DEFAULT_CONFIG

    extensions = config.get('extensions') or []
    if isinstance(extensions, str):
        extensions = [extensions]

    interpreter = Interpreter(code,
                              input_stream=input_stream,
                              output_stream=output_stream,
                              debug=bool(config.get('debug', False)),
                              trace_stream=trace_stream,
                              cell_type=config.get('cell-type', DEFAULT_CELL_TYPE))

    for name in extensions:
        symbol, instruction = make_instruction(name)
        interpreter.register(symbol, instruction)
        logger.info('Extension %s enabled on %s', name, symbol)

    return interpreter
