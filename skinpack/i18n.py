"""User-facing strings in Japanese and English.

``ja`` is the primary language; ``en`` is the default every lookup falls
back to.
"""

import json
import locale
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

log = logging.getLogger(__name__)

PRIMARY = 'ja'
DEFAULT = 'en'
LANGUAGES = (PRIMARY, DEFAULT)

MESSAGES = {
    'ja': {
        'title': 'スキンリソースパックジェネレーター',
        'subtitle': "Toi's Item Animator用",
        'label_mcid': 'MCID',
        'placeholder_mcid': '例: Notch',
        'btn_fetch': '取得',
        'preview_title': 'スキンプレビュー',
        'btn_download': '📦 リソースパックをダウンロード',
        'btn_downloading': '📦 生成中...',
        'err_empty': 'MCIDを入力してください。',
        'err_invalid': '無効なMCIDです。3-16文字の英数字とアンダースコアのみ使用できます。',
        'err_not_found': 'スキンが見つかりませんでした。MCIDを確認してください。',
        'err_generate': 'リソースパックの生成に失敗しました。',
        'err_fetch_first': '先にスキンを取得してください。',
        'saved_to': '保存しました: {path}',
    },
    'en': {
        'title': 'Skin Resource Pack Generator',
        'subtitle': "For Toi's Item Animator",
        'label_mcid': 'MCID',
        'placeholder_mcid': 'e.g. Notch',
        'btn_fetch': 'Fetch',
        'preview_title': 'Skin Preview',
        'btn_download': '📦 Download Resource Pack',
        'btn_downloading': '📦 Generating...',
        'err_empty': 'Please enter a MCID.',
        'err_invalid': 'Invalid MCID. Only 3-16 alphanumeric characters and underscores are allowed.',
        'err_not_found': 'Skin not found. Please check the MCID.',
        'err_generate': 'Failed to generate the resource pack.',
        'err_fetch_first': 'Please fetch a skin first.',
        'saved_to': 'Saved to {path}',
    },
}


def translate(lang, key):
    table = MESSAGES.get(lang) or {}
    return table.get(key) or MESSAGES[DEFAULT].get(key) or key


def other_language(lang):
    return DEFAULT if lang == PRIMARY else PRIMARY


def toggle_label(lang):
    """Label for the language button: the code of the language it switches to."""
    return other_language(lang).upper()


def detect_language(environ: Optional[Mapping[str, str]] = None) -> str:
    if environ is None:
        environ = os.environ
    for name in ('LC_ALL', 'LC_MESSAGES', 'LANG', 'LANGUAGE'):
        value = environ.get(name)
        if value:
            break
    else:
        value = locale.getlocale()[0] or ''
    return PRIMARY if value.lower().startswith('ja') else DEFAULT


class LanguageStore(object):
    """The persisted language preference, a one-key JSON file."""

    def __init__(self, path):
        self.path = Path(path)

    def load(self):
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                lang = json.load(f).get('lang')
        except (OSError, ValueError, AttributeError) as e:
            log.debug("No usable language preference in {0}: {1}".format(self.path, e))
            return None
        return lang if lang in LANGUAGES else None

    def save(self, lang):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump({'lang': lang}, f)

    def initial_language(self, environ=None):
        return self.load() or detect_language(environ)
