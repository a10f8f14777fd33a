import pytest

from skinpack.controller import Controller, Session

SKIN = b'\x89PNG\r\n\x1a\n' + bytes(range(256)) * 4


class FakeView(object):
    def __init__(self):
        self.calls = []
        self.texts = {}
        self.title = None
        self.placeholder = None
        self.toggle_label = None
        self.error = ''
        self.preview = None
        self.fetch_loading = False
        self.download_busy = False
        self.saved = None

    def set_title(self, text):
        self.title = text

    def set_text(self, element, text):
        self.texts[element] = text

    def set_placeholder(self, text):
        self.placeholder = text

    def set_toggle_label(self, text):
        self.toggle_label = text

    def set_fetch_loading(self, loading):
        self.calls.append(('fetch_loading', loading))
        self.fetch_loading = loading

    def set_download_busy(self, busy):
        self.calls.append(('download_busy', busy, self.texts.get('download_button')))
        self.download_busy = busy

    def show_error(self, text):
        self.error = text

    def clear_error(self):
        self.error = ''

    def show_preview(self, skin, name):
        self.preview = (skin, name)

    def hide_preview(self):
        self.preview = None

    def show_saved(self, text):
        self.saved = text


class FakeFetcher(object):
    def __init__(self, result=SKIN, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def __call__(self, username, lang):
        self.calls.append((username, lang))
        if self.error is not None:
            raise self.error
        return self.result


class MemorySaver(object):
    def __init__(self):
        self.saved = []

    def __call__(self, data, filename):
        self.saved.append((data, filename))
        return filename


class QueuedRunner(object):
    """Holds work until the test decides to finish it."""

    def __init__(self):
        self.pending = []

    def __call__(self, work, done):
        self.pending.append((work, done))

    def finish(self, index=0):
        work, done = self.pending.pop(index)
        try:
            result = work()
        except Exception as e:
            done(None, e)
        else:
            done(result, None)


@pytest.fixture
def view():
    return FakeView()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def saver():
    return MemorySaver()


@pytest.fixture
def controller(view, fetcher, saver):
    c = Controller(view, Session(lang='en'), fetcher, saver)
    c.apply_translations()
    return c
