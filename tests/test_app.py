import pytest

from cafe import app
from cafe.app import Application
from cafe.config import Settings


@pytest.fixture(autouse=True)
def keep_sigint(monkeypatch):
    monkeypatch.setattr(app.signal, "signal", lambda *args: None)


def test_unreachable_database_exits_with_error(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        app.main([str(tmp_path / "no" / "such" / "dir" / "cafe"), "5432", "me"])
    assert info.value.code == 1
    assert "unable to connect" in capsys.readouterr().err


def test_bad_retry_setting_exits(monkeypatch, capsys):
    monkeypatch.setenv("CAFE_ITEM_ATTEMPTS", "zero")
    with pytest.raises(SystemExit) as info:
        app.main(["cafe", "5432", "me"])
    assert info.value.code == 2


def test_session_on_a_file_database(tmp_path, monkeypatch, feed, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CAFE_ITEM_ATTEMPTS", raising=False)
    feed("2", "admin", "admin", "1", "4", "9", "9", "9")
    app.main(["shop", "5432", "me"])
    out = capsys.readouterr().out
    assert "connecting to database sqlite://me@localhost:5432/shop.db" in out
    assert "Clam Chowder" in out
    assert "bye!" in out
    assert (tmp_path / "shop.db").exists()


def test_application_uses_given_database(db, feed, capsys):
    feed()
    application = Application(Settings(":memory:", "0", "u", item_attempts=4), db)
    assert application.orders.item_attempts == 4
    application.run()
    assert "disconnecting from database" in capsys.readouterr().out


def test_corrupt_database_file_exits_with_error(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "shop.db").write_text("this is not a sqlite database\n" * 100)
    with pytest.raises(SystemExit) as info:
        app.main(["shop", "5432", "me"])
    assert info.value.code == 1
    assert "unable to connect" in capsys.readouterr().err
