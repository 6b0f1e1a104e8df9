"""CLI Argument Parsing"""

import argparse
import argcomplete

from commitcoach import STYLE_NAMES, __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='commitcoach',
        description='AI commit message helper',
        epilog='Example: git add -p && commitcoach -s casual'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Generation options
    parser.add_argument('-s', '--style', type=str, choices=STYLE_NAMES, help='Message style (default: conventional)')
    parser.add_argument('--server', type=str, metavar='URL', help='CommitCoach proxy URL')

    # Output options
    parser.add_argument('--verbose', action='store_true', help='Show debug info (diff size, timings)')

    # Setup/config
    parser.add_argument('--setup', action='store_true', help='Configure defaults')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
