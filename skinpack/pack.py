"""Resource pack construction for Toi's Item Animator."""

import io
import json
import logging
import zipfile

from .errors import PackGeneration

log = logging.getLogger(__name__)

MCMETA_PATH = 'pack.mcmeta'
TEXTURE_PATH = 'assets/item/textures/item/hands/texture.png'
PACK_FILENAME = 'Resourcepack for Item Animator.zip'

PACK_MCMETA = {
    'pack': {
        'min_format': 75,
        'max_format': 75,
        'description': {
            'text': '',
            'extra': [
                {'text': 'Skin for RPG', 'color': 'gold'},
                {'text': ' | '},
                {'text': '1.21.11', 'color': '#ffdd99'},
            ],
        },
    },
}


def render_mcmeta():
    return json.dumps(PACK_MCMETA, indent=2, ensure_ascii=False)


def build_pack(skin):
    """Return the zip archive bytes holding ``pack.mcmeta`` and ``skin``."""
    buf = io.BytesIO()
    try:
        with zipfile.ZipFile(buf, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr(MCMETA_PATH, render_mcmeta().encode('utf-8'))
            zf.writestr(TEXTURE_PATH, bytes(skin))
    except Exception as e:
        raise PackGeneration() from e
    data = buf.getvalue()
    log.debug("Built pack: {0} bytes, skin {1} bytes".format(len(data), len(skin)))
    return data


def read_pack(data):
    """Map each entry name in a pack archive to its contents."""
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return {name: zf.read(name) for name in zf.namelist()}
