import argparse
import sys
import zipfile
from functools import partial
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import load_settings
from .controller import Controller, Session
from .download import save_to_directory
from .getskin import fetch_skin
from .i18n import LANGUAGES, LanguageStore
from .log import setup_logging
from .pack import read_pack

console = Console()
err_console = Console(stderr=True)


class ConsoleView(object):
    """Terminal rendition of the window: only errors and results are printed."""

    def __init__(self, out=console, err=err_console):
        self.out = out
        self.err = err
        self.errors = []

    def set_title(self, text):
        pass

    def set_text(self, element, text):
        pass

    def set_placeholder(self, text):
        pass

    def set_toggle_label(self, text):
        pass

    def set_fetch_loading(self, loading):
        pass

    def set_download_busy(self, busy):
        pass

    def show_error(self, text):
        self.errors.append(text)
        self.err.print("[bold red]{0}[/]".format(escape(text)), highlight=False)

    def clear_error(self):
        pass

    def show_preview(self, skin, name):
        self.out.print("Fetched skin for [bold]{0}[/] ({1} bytes)".format(name, len(skin)),
                       highlight=False)

    def hide_preview(self):
        pass

    def show_saved(self, text):
        self.out.print(escape(text), highlight=False)


def list_pack(path, out=console):
    with open(path, 'rb') as f:
        entries = read_pack(f.read())
    table = Table(title=str(path))
    table.add_column('Entry')
    table.add_column('Size', justify='right')
    for name, data in entries.items():
        table.add_row(name, str(len(data)))
    out.print(table)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='skinpack',
        description="Fetch a Minecraft skin and package it as a resource pack for Toi's Item Animator")
    parser.add_argument('username', nargs='?', help='player MCID')
    parser.add_argument('-o', '--output', dest='output', default='.', metavar='DIR',
                        help='directory to write the resource pack to')
    parser.add_argument('--lang', dest='lang', choices=LANGUAGES,
                        help='message language (default: saved preference or system locale)')
    parser.add_argument('--url', dest='url', metavar='TEMPLATE',
                        help='skin URL template containing {username}')
    parser.add_argument('--check', dest='check', metavar='PACK',
                        help='list the entries of an existing resource pack')
    parser.add_argument('--gui', dest='gui', action='store_true',
                        help='open the window instead of working on the command line')
    parser.add_argument('-v', '--verbose', dest='verbose', action='store_true',
                        help='log debug output')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    if args.url:
        settings.skin_url = args.url
    setup_logging('DEBUG' if args.verbose else settings.log_level, console=err_console)

    if args.check:
        try:
            list_pack(Path(args.check))
        except (OSError, zipfile.BadZipFile) as e:
            err_console.print("[bold red]Could not read {0}: {1}[/]".format(
                escape(args.check), escape(str(e))), highlight=False)
            return 1
        return 0

    if args.gui:
        from .gui import main as gui_main
        gui_main(settings)
        return 0

    if args.username is None:
        parser.error('Please provide a username')

    lang = args.lang or LanguageStore(settings.settings_file).initial_language()
    view = ConsoleView()
    controller = Controller(
        view,
        Session(lang=lang),
        partial(fetch_skin, url_template=settings.skin_url, timeout=settings.timeout),
        save_to_directory(args.output),
    )
    controller.dispatch('fetch', args.username)
    if not view.errors:
        controller.dispatch('download')
    return 1 if view.errors else 0


def gui():
    from .gui import main as gui_main
    gui_main()


if __name__ == '__main__':
    sys.exit(main())
