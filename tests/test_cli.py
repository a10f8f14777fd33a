import pytest

from skinpack import cli
from skinpack.errors import NotFound
from skinpack.pack import PACK_FILENAME, TEXTURE_PATH, build_pack, read_pack

from .conftest import SKIN


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv('SKINPACK_CONFIG_DIR', str(tmp_path / 'config'))
    monkeypatch.delenv('SKINPACK_SKIN_URL', raising=False)
    monkeypatch.delenv('LC_ALL', raising=False)
    monkeypatch.delenv('LC_MESSAGES', raising=False)
    monkeypatch.setenv('LANG', 'en_US.UTF-8')


@pytest.fixture
def fetched(monkeypatch):
    calls = []

    def fake_fetch(username, lang='en', url_template=None, session=None, timeout=None):
        calls.append((username, lang, url_template))
        return SKIN

    monkeypatch.setattr(cli, 'fetch_skin', fake_fetch)
    return calls


def test_writes_pack_to_output_dir(tmp_path, fetched, capsys):
    out = tmp_path / 'out'
    assert cli.main(['-o', str(out), 'Notch']) == 0
    assert fetched == [('Notch', 'en', 'https://minotar.net/skin/{username}')]
    assert read_pack((out / PACK_FILENAME).read_bytes())[TEXTURE_PATH] == SKIN
    assert 'Notch' in capsys.readouterr().out


def test_invalid_username_exits_nonzero(tmp_path, fetched, capsys):
    assert cli.main(['-o', str(tmp_path), 'ab']) == 1
    assert fetched == []
    assert 'Invalid MCID' in capsys.readouterr().err
    assert not (tmp_path / PACK_FILENAME).exists()


def test_not_found_exits_nonzero(tmp_path, monkeypatch, capsys):
    def missing(username, lang='en', **kwargs):
        raise NotFound('Skin not found. Please check the MCID.')

    monkeypatch.setattr(cli, 'fetch_skin', missing)
    assert cli.main(['-o', str(tmp_path), 'Notch']) == 1
    assert 'Skin not found' in capsys.readouterr().err
    assert not (tmp_path / PACK_FILENAME).exists()


def test_lang_and_url_flags(tmp_path, fetched, capsys):
    assert cli.main(['-o', str(tmp_path), '--lang', 'ja', '--url', 'http://x/{username}', 'jeb_']) == 0
    assert fetched == [('jeb_', 'ja', 'http://x/{username}')]
    assert '保存しました' in capsys.readouterr().out


def test_saved_language_preference_is_used(tmp_path, fetched):
    (tmp_path / 'config').mkdir()
    (tmp_path / 'config' / 'settings.json').write_text('{"lang": "ja"}')
    cli.main(['-o', str(tmp_path), 'Notch'])
    assert fetched[0][1] == 'ja'


def test_missing_username_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as info:
        cli.main([])
    assert info.value.code == 2
    assert 'Please provide a username' in capsys.readouterr().err


def test_check_lists_entries(tmp_path, capsys):
    path = tmp_path / PACK_FILENAME
    path.write_bytes(build_pack(SKIN))
    assert cli.main(['--check', str(path)]) == 0
    out = capsys.readouterr().out
    assert 'pack.mcmeta' in out
    assert 'texture.png' in out


def test_gui_flag_opens_window(monkeypatch):
    pytest.importorskip('tkinter')
    pytest.importorskip('PIL.ImageTk')
    opened = []
    monkeypatch.setattr('skinpack.gui.main', lambda settings=None: opened.append(settings))
    assert cli.main(['--gui']) == 0
    assert len(opened) == 1


def test_player_named_gui_is_fetched(tmp_path, fetched):
    assert cli.main(['-o', str(tmp_path), 'gui']) == 0
    assert [call[0] for call in fetched] == ['gui']
    assert (tmp_path / PACK_FILENAME).exists()


def test_check_on_non_zip_file_exits_nonzero(tmp_path, capsys):
    path = tmp_path / 'x.zip'
    path.write_bytes(b'not a zip')
    assert cli.main(['--check', str(path)]) == 1
    assert 'Could not read' in capsys.readouterr().err


def test_check_on_missing_file_exits_nonzero(tmp_path, capsys):
    assert cli.main(['--check', str(tmp_path / 'missing.zip')]) == 1
    assert 'Could not read' in capsys.readouterr().err
