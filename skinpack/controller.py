"""The fetch/preview/download flow, independent of any widget toolkit.

The controller owns a Session and drives a View. User actions arrive
through ``dispatch`` by name; the view is only ever told what to show.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from . import i18n
from .errors import EmptyInput, FetchFirst, InvalidFormat, PackGeneration, SkinPackError
from .pack import PACK_FILENAME, build_pack

log = logging.getLogger(__name__)

MCID_RE = re.compile(r'^[A-Za-z0-9_]{3,16}$')

# Elements whose text is re-rendered whenever the language changes.
LABELLED = (
    ('title', 'title'),
    ('subtitle', 'subtitle'),
    ('mcid_label', 'label_mcid'),
    ('fetch_button', 'btn_fetch'),
    ('preview_title', 'preview_title'),
    ('download_button', 'btn_download'),
)


def validate_username(text):
    username = (text or '').strip()
    if not username:
        raise EmptyInput()
    if not MCID_RE.match(username):
        raise InvalidFormat()
    return username


@dataclass
class Session:
    lang: str = i18n.DEFAULT
    skin: Optional[bytes] = None
    player_name: str = ''
    generation: int = 0
    fetching: bool = False
    packaging: bool = False


class View(Protocol):
    def set_title(self, text: str) -> None: ...
    def set_text(self, element: str, text: str) -> None: ...
    def set_placeholder(self, text: str) -> None: ...
    def set_toggle_label(self, text: str) -> None: ...
    def set_fetch_loading(self, loading: bool) -> None: ...
    def set_download_busy(self, busy: bool) -> None: ...
    def show_error(self, text: str) -> None: ...
    def clear_error(self) -> None: ...
    def show_preview(self, skin: bytes, name: str) -> None: ...
    def hide_preview(self) -> None: ...
    def show_saved(self, text: str) -> None: ...


def run_inline(work, done):
    """Runner that does the work immediately on the calling thread."""
    try:
        result = work()
    except Exception as e:
        done(None, e)
    else:
        done(result, None)


class Controller(object):
    def __init__(self, view: View, session: Session, fetcher, saver, store=None,
                 runner: Callable = run_inline):
        self.view = view
        self.session = session
        self.fetcher = fetcher
        self.saver = saver
        self.store = store
        self.runner = runner
        self.actions = {
            'fetch': self.fetch,
            'submit': self.fetch,
            'download': self.download,
            'toggle_language': self.toggle_language,
            'input_changed': self.input_changed,
        }

    def dispatch(self, action, *args):
        return self.actions[action](*args)

    def t(self, key):
        return i18n.translate(self.session.lang, key)

    def report(self, error):
        self.view.show_error(error.message or self.t(error.key))

    def apply_translations(self):
        self.view.set_title(self.t('title'))
        for element, key in LABELLED:
            self.view.set_text(element, self.t(key))
        if self.session.packaging:
            self.view.set_text('download_button', self.t('btn_downloading'))
        self.view.set_placeholder(self.t('placeholder_mcid'))
        self.view.set_toggle_label(i18n.toggle_label(self.session.lang))

    def toggle_language(self):
        self.session.lang = i18n.other_language(self.session.lang)
        if self.store is not None:
            self.store.save(self.session.lang)
        self.apply_translations()

    def input_changed(self, *args):
        self.view.clear_error()

    def fetch(self, text):
        try:
            username = validate_username(text)
        except SkinPackError as e:
            self.report(e)
            return False

        self.view.clear_error()
        self.session.skin = None
        self.session.player_name = ''
        self.view.hide_preview()

        self.session.generation += 1
        generation = self.session.generation
        self.session.fetching = True
        self.view.set_fetch_loading(True)
        lang = self.session.lang

        def done(skin, error):
            if generation != self.session.generation:
                log.debug("Discarding superseded fetch for {0}".format(username))
                return
            self.session.fetching = False
            self.view.set_fetch_loading(False)
            if error is not None:
                if isinstance(error, SkinPackError):
                    self.report(error)
                else:
                    log.error("Unexpected fetch failure for {0}".format(username),
                              exc_info=error)
                    self.view.show_error(self.t('err_not_found'))
                return
            self.session.skin = skin
            self.session.player_name = username
            self.view.show_preview(skin, username)

        self.runner(lambda: self.fetcher(username, lang), done)
        return True

    def download(self):
        if self.session.skin is None:
            self.report(FetchFirst())
            return False
        if self.session.packaging:
            return False

        self.session.packaging = True
        self.view.set_download_busy(True)
        self.view.set_text('download_button', self.t('btn_downloading'))
        skin = self.session.skin

        def done(data, error):
            path = None
            if error is None:
                # Savers may prompt the user, so they run on the UI thread.
                try:
                    path = self.saver(data, PACK_FILENAME)
                except Exception as e:
                    error = e
            self.session.packaging = False
            if error is not None:
                log.error("Resource pack generation failed", exc_info=error)
                self.report(PackGeneration())
            elif path is not None:
                log.info("Saved resource pack to {0}".format(path))
                self.view.show_saved(self.t('saved_to').format(path=path))
            self.view.set_download_busy(False)
            self.view.set_text('download_button', self.t('btn_download'))

        self.runner(lambda: build_pack(skin), done)
        return True
