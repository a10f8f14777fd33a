import logging

import requests

from .errors import NotFound
from .i18n import translate

log = logging.getLogger(__name__)

skin_url = "https://minotar.net/skin/{username}"


def fetch_skin(username, lang='en', url_template=skin_url, session=None, timeout=None):
    """Download the skin PNG for ``username`` and return its bytes.

    Raises NotFound, with a message in ``lang``, for any non-success
    response or transport failure. No retries.
    """
    url = url_template.format(username=username)
    http = session or requests
    try:
        r = http.get(url, timeout=timeout)
    except requests.RequestException as e:
        log.debug("{0} failed: {1}".format(url, e))
        raise NotFound(translate(lang, NotFound.key)) from e

    log.debug("{0} {1}".format(r.status_code, url))
    if not r.ok:
        raise NotFound(translate(lang, NotFound.key))
    return r.content
