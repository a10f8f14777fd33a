import io
import logging
import tkinter
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from tkinter import filedialog, ttk

from PIL import Image, ImageTk

from .config import load_settings
from .controller import Controller, Session
from .download import write_file
from .getskin import fetch_skin
from .i18n import LanguageStore
from .log import setup_logging

log = logging.getLogger(__name__)

PREVIEW_SCALE = 4
POLL_MS = 50
# Seconds before a stalled skin request gives up, unless SKINPACK_TIMEOUT is set.
FETCH_TIMEOUT = 15
WORKERS = 2


class TkRunner(object):
    """Run work on background threads, finish on the Tk thread."""

    def __init__(self, widget):
        self.widget = widget
        self.executor = ThreadPoolExecutor(max_workers=WORKERS)

    def __call__(self, work, done):
        future = self.executor.submit(work)
        self.widget.after(POLL_MS, self._poll, future, done)

    def _poll(self, future, done):
        if not future.done():
            self.widget.after(POLL_MS, self._poll, future, done)
            return
        error = future.exception()
        done(None if error else future.result(), error)

    def shutdown(self):
        self.executor.shutdown(wait=False, cancel_futures=True)


class DialogSaver(object):
    def __init__(self, parent):
        self.parent = parent

    def __call__(self, data, filename):
        path = filedialog.asksaveasfilename(parent=self.parent, initialfile=filename,
                                            defaultextension='.zip',
                                            filetypes=[('Zip archive', '*.zip')])
        if not path:
            return None
        return write_file(path, data)


def skin_fetcher(settings):
    timeout = settings.timeout if settings.timeout is not None else FETCH_TIMEOUT
    return partial(fetch_skin, url_template=settings.skin_url, timeout=timeout)


def preview_image(skin, scale=PREVIEW_SCALE):
    img = Image.open(io.BytesIO(skin)).convert('RGBA')
    img = img.resize((img.width * scale, img.height * scale), Image.NEAREST)
    return ImageTk.PhotoImage(img)


class SkinPackApp(ttk.Frame):
    def __init__(self, master):
        super().__init__(master, padding=16)
        self.photo = None
        self.on_action = None

        self.title_label = ttk.Label(self, font=('TkDefaultFont', 14, 'bold'))
        self.title_label.grid(row=0, column=0, columnspan=3, sticky='w')
        self.subtitle_label = ttk.Label(self)
        self.subtitle_label.grid(row=1, column=0, columnspan=2, sticky='w')
        self.lang_button = ttk.Button(self, width=4,
                                      command=lambda: self.fire('toggle_language'))
        self.lang_button.grid(row=1, column=2, sticky='e')

        self.mcid_label = ttk.Label(self)
        self.mcid_label.grid(row=2, column=0, sticky='w', pady=(12, 0))
        self.mcid = tkinter.StringVar()
        self.entry = ttk.Entry(self, textvariable=self.mcid, width=24)
        self.entry.grid(row=2, column=1, sticky='we', pady=(12, 0))
        self.entry.bind('<Return>', lambda e: self.fire('submit', self.mcid.get()))
        self.mcid.trace_add('write', lambda *args: self.fire('input_changed'))
        self.fetch_button = ttk.Button(self, command=lambda: self.fire('fetch', self.mcid.get()))
        self.fetch_button.grid(row=2, column=2, sticky='e', pady=(12, 0))
        self.placeholder_label = ttk.Label(self, foreground='grey')
        self.placeholder_label.grid(row=3, column=1, sticky='w')

        self.error_label = ttk.Label(self, foreground='#c0392b', wraplength=360)
        self.error_label.grid(row=4, column=0, columnspan=3, sticky='w', pady=4)

        self.preview = ttk.Frame(self)
        self.preview_title = ttk.Label(self.preview, font=('TkDefaultFont', 11, 'bold'))
        self.preview_title.pack()
        self.skin_label = ttk.Label(self.preview)
        self.skin_label.pack(pady=4)
        self.player_name = ttk.Label(self.preview)
        self.player_name.pack()
        self.download_button = ttk.Button(self.preview, command=lambda: self.fire('download'))
        self.download_button.pack(pady=(8, 0))
        self.status_label = ttk.Label(self.preview, foreground='grey', wraplength=360)
        self.status_label.pack()

        self.columnconfigure(1, weight=1)
        self.elements = {
            'title': self.title_label,
            'subtitle': self.subtitle_label,
            'mcid_label': self.mcid_label,
            'fetch_button': self.fetch_button,
            'preview_title': self.preview_title,
            'download_button': self.download_button,
        }

    def fire(self, action, *args):
        if self.on_action is not None:
            self.on_action(action, *args)

    def set_title(self, text):
        self.master.title(text)
        self.title_label.configure(text=text)

    def set_text(self, element, text):
        self.elements[element].configure(text=text)

    def set_placeholder(self, text):
        self.placeholder_label.configure(text=text)

    def set_toggle_label(self, text):
        self.lang_button.configure(text=text)

    def set_fetch_loading(self, loading):
        self.fetch_button.state(['disabled'] if loading else ['!disabled'])
        self.configure(cursor='watch' if loading else '')

    def set_download_busy(self, busy):
        self.download_button.state(['disabled'] if busy else ['!disabled'])

    def show_error(self, text):
        self.error_label.configure(text=text)

    def clear_error(self):
        self.error_label.configure(text='')

    def show_preview(self, skin, name):
        try:
            self.photo = preview_image(skin)
        except (OSError, ValueError) as e:
            log.warning("Could not decode skin for {0}: {1}".format(name, e))
            self.photo = None
        self.skin_label.configure(image=self.photo or '')
        self.player_name.configure(text=name)
        self.status_label.configure(text='')
        self.preview.grid(row=5, column=0, columnspan=3, pady=(8, 0))

    def hide_preview(self):
        self.preview.grid_remove()
        self.skin_label.configure(image='')
        self.photo = None

    def show_saved(self, text):
        self.status_label.configure(text=text)


def main(settings=None):
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    root = tkinter.Tk()
    root.resizable(False, False)
    app = SkinPackApp(root)
    app.pack(fill='both', expand=True)

    store = LanguageStore(settings.settings_file)
    runner = TkRunner(root)
    controller = Controller(
        app,
        Session(lang=store.initial_language()),
        skin_fetcher(settings),
        DialogSaver(root),
        store=store,
        runner=runner,
    )
    app.on_action = controller.dispatch
    controller.apply_translations()
    app.hide_preview()
    app.entry.focus_set()

    try:
        root.mainloop()
    finally:
        runner.shutdown()
