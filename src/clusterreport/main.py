#!python
import argparse
import json
import logging
import os
import platform
import sys
import time
from typing import Dict, List, Optional

from . import __version__
from . import config as _config
from . import util as _util
from .cluster import read_clusters
from .constants import REPORT_TYPE
from .report import create_reporter, write_report
from .schemas import DEFAULTS
from .util import filepath


def create_parser(argv):
    parser = argparse.ArgumentParser(
        formatter_class=_config.CustomHelpFormatter,
        add_help=False,
        description='write a report describing the clusters from a clustering run',
    )
    required = parser.add_argument_group('required arguments')
    optional = parser.add_argument_group('optional arguments')
    optional.add_argument('-h', '--help', action='help', help='show this help message and exit')
    optional.add_argument(
        '-v',
        '--version',
        action='version',
        version='%(prog)s version ' + __version__,
        help='Outputs the version number',
    )
    optional.add_argument('--log', help='redirect stdout to a log file', default=None)
    optional.add_argument(
        '--log_level',
        help='level of logging to output',
        choices=['INFO', 'DEBUG'],
        default='INFO',
    )
    optional.add_argument(
        '--config',
        '-c',
        help='path to the JSON config file. The defaults are used if not given',
        type=filepath,
        default=None,
    )
    required.add_argument(
        '-n',
        '--inputs',
        nargs='+',
        help='path to the cluster files',
        required=True,
        metavar='FILEPATH',
    )
    required.add_argument(
        '-o', '--output', help='path to the report file', required=True, metavar='FILEPATH'
    )
    required.add_argument(
        '-t',
        '--report_type',
        choices=sorted(REPORT_TYPE.values()),
        required=True,
        help='the type of report to write',
    )
    return parser, parser.parse_args(argv)


def load_config(path: Optional[str]) -> Dict:
    """
    read and validate the JSON config, filling in any missing values from the defaults
    """
    if not path:
        return dict(DEFAULTS)
    with open(path, 'r') as fh:
        config = json.load(fh)
    return _config.validate_config(config)


def main(argv: Optional[List[str]] = None):
    """
    sets up the parser and checks the validity of command line args
    loads the clusters and writes the requested report

    Args:
        argv: List of arguments, defaults to command line arguments
    """
    if argv is None:  # need to do at run time or patching will not behave as expected
        argv = sys.argv[1:]
    start_time = int(time.time())
    parser, args = create_parser(argv)

    log_conf = {
        'format': '{asctime} [{levelname}] {message}',
        'style': '{',
        'level': args.log_level,
    }

    original_logging_handlers = logging.root.handlers[:]
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    if args.log:  # redirect stdout AND stderr to a log file
        log_conf['filename'] = args.log
    logging.basicConfig(**log_conf)

    _util.logger.info(f'clusterreport: {__version__}')
    _util.logger.info(f'hostname: {platform.node()}')
    _util.log_arguments(args)

    try:
        args.inputs = _util.bash_expands(*args.inputs)
    except FileNotFoundError:
        parser.error('--inputs file(s) {} do not exist'.format(args.inputs))

    try:
        config = load_config(args.config)
        options = _config.ReportOptions.from_config(config)
        reporter = create_reporter(args.report_type, options)
        group = read_clusters(*args.inputs)

        if os.path.dirname(args.output):
            _util.mkdirp(os.path.dirname(args.output))
        _util.logger.info(f'writing: {args.output}')
        with open(args.output, 'w') as fh:
            write_report(reporter, group, fh)
        _util.log_run_time(start_time)
    except Exception as err:
        raise err
    finally:
        try:
            for handler in logging.root.handlers[:]:
                logging.root.removeHandler(handler)
                if handler not in original_logging_handlers:
                    handler.close()
            for handler in original_logging_handlers:
                logging.root.addHandler(handler)
        except Exception as err:
            print(err)


if __name__ == '__main__':
    main()
