import argparse
from dataclasses import replace
import json
import logging
import sys

from html_tg.converter import compile_formatted_text
from html_tg.settings import Settings

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='html_tg',
        description='Compile editor HTML with inline markup into Telegram text and entities.',
    )
    parser.add_argument('text', nargs='?', help='Input text. Read from stdin when omitted.')
    parser.add_argument(
        '--no-custom-emoji',
        action='store_true',
        help='Rewrite [<img alt="...">] emoji placeholders to [alt] before parsing.',
    )
    parser.add_argument('--indent', type=int, default=None, help='Indent JSON output.')
    return parser


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    logging.basicConfig(level=getattr(logging, settings.logging_level), stream=sys.stderr)

    args = build_parser().parse_args(argv)

    if args.text is not None:
        source = args.text
    else:
        try:
            source = sys.stdin.read()
        except OSError as e:
            LOGGER.error('Failed to read input: %s', e)
            return 1

    config = settings.parser_config()
    if args.no_custom_emoji:
        config = replace(config, custom_emoji_supported=False)

    result = compile_formatted_text(source, config)
    LOGGER.info('Compiled %d characters', len(source))
    print(json.dumps(result, ensure_ascii=False, indent=args.indent))
    return 0


if __name__ == '__main__':
    sys.exit(main())
