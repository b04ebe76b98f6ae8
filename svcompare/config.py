import argparse
import json
from typing import Dict, Optional

from .constants import cast_boolean
from .homology.constants import DEFAULTS as HOMOLOGY_DEFAULTS
from .pairing.constants import DEFAULTS as PAIRING_DEFAULTS
from .util import NullableType, filepath, logger

CONFIG_SECTIONS = {'pairing': PAIRING_DEFAULTS, 'homology': HOMOLOGY_DEFAULTS}


class CustomHelpFormatter(argparse.ArgumentDefaultsHelpFormatter):
    """
    subclass the default help formatter to stop default printing for required arguments
    """

    def _format_args(self, action, default_metavar):
        if action.metavar is None:
            action.metavar = get_metavar(action.type)
        return super(CustomHelpFormatter, self)._format_args(action, default_metavar)

    def _get_help_string(self, action):
        if action.required:
            return action.help
        return super(CustomHelpFormatter, self)._get_help_string(action)

    def add_arguments(self, actions):
        # sort the arguments alphanumerically so they print in the help that way
        actions = sorted(actions, key=lambda x: getattr(x, 'option_strings'))
        super(CustomHelpFormatter, self).add_arguments(actions)


def get_metavar(arg_type):
    """
    For a given argument type, returns the string to be used for the metavar argument in add_argument

    Example:
        >>> get_metavar(bool)
        '{True,False}'
    """
    if arg_type in [bool, cast_boolean]:
        return '{True,False}'
    elif arg_type == float:
        return 'FLOAT'
    elif isinstance(arg_type, NullableType):
        inner = get_metavar(arg_type.callback_func)
        return inner if inner is None else inner + '|None'
    elif arg_type == int:
        return 'INT'
    elif arg_type == filepath:
        return 'FILEPATH'
    return None


def add_section_arguments(parser, section: str, names=None):
    """
    add an optional argument for each of the defaults of a config section. Absent arguments are
    left out of the parsed namespace so that only the values given on the command line override the config file
    """
    defaults = CONFIG_SECTIONS[section]
    for name in names or defaults.keys():
        flag = {'nargs': '?', 'const': True} if defaults.type(name) == cast_boolean else {}
        parser.add_argument(
            f'--{name}',
            type=defaults.type(name),
            **flag,
            default=argparse.SUPPRESS,
            help='{} (default: {})'.format(defaults.define(name, ''), repr(defaults[name])),
        )


def default_config() -> Dict:
    """
    Returns:
        the flattened (``<section>.<name>``) default configuration, with environment overrides applied
    """
    config = {}
    for section, defaults in CONFIG_SECTIONS.items():
        for name, value in defaults.items():
            config[f'{section}.{name}'] = value
    return config


def validate_config(config: Dict) -> Dict:
    """
    check the keys of a flattened config and cast each value to the type of its default

    Raises:
        KeyError: a key does not correspond to any known setting
    """
    result = {}
    for key, value in config.items():
        section, _, name = key.partition('.')
        if section not in CONFIG_SECTIONS or name not in CONFIG_SECTIONS[section]:
            raise KeyError('unrecognized configuration setting', key)
        defaults = CONFIG_SECTIONS[section]
        if value is None and not defaults.is_nullable(name):
            raise TypeError('configuration setting may not be null', key)
        result[key] = value if value is None else defaults.type(name)(value)
    return result


def load_config(path: Optional[str] = None, overrides: Optional[Dict] = None) -> Dict:
    """
    build the run configuration. Values given as overrides (typically the command line) win over the
    values in the JSON config file which in turn win over the defaults

    Args:
        path: path to a JSON config file with ``<section>.<name>`` keys
        overrides: flattened settings which take precedence over the config file
    """
    config = default_config()
    if path:
        logger.info(f'loading config: {path}')
        with open(path, 'r') as fh:
            config.update(validate_config(json.load(fh)))
    if overrides:
        config.update(validate_config(overrides))
    return config
