import pytest

from duckspider.settings import (
    Setting,
    SettingManager,
    SpiderSection,
    parse_setting,
)

YAML = """
Spider:
  SpiderName: demo
  WorkerNumber: 4
  TLS: true
  LOGLEVEL: debug
Headers:
  User-Agent: duck
Cookies:
  session: token
"""


@pytest.fixture
def manager():
    mgr = SettingManager()
    mgr.load_from_setting(parse_setting(YAML))
    return mgr


def test_parse_setting_reads_spider_block():
    setting = parse_setting(YAML)
    assert setting.spider == SpiderSection(name="demo", worker=4, tls=True, loglevel="debug")
    assert setting.headers == {"User-Agent": "duck"}
    assert setting.cookies == {"session": "token"}


def test_parse_setting_accepts_mapping_and_bytes():
    mapping = {"Spider": {"SpiderName": "demo", "WorkerNumber": 4, "TLS": True, "LOGLEVEL": "debug"},
               "Headers": {"User-Agent": "duck"}, "Cookies": {"session": "token"}}
    assert parse_setting(mapping) == parse_setting(YAML)
    assert parse_setting(YAML.encode()) == parse_setting(YAML)


def test_parse_setting_empty_gives_defaults():
    assert parse_setting({}) == Setting()
    assert parse_setting("") == Setting()


def test_parse_setting_scalar_map_values_become_text():
    setting = parse_setting({"Headers": {"X-Retry": 3, "X-Flag": True}})
    assert setting.headers == {"X-Retry": "3", "X-Flag": "true"}


@pytest.mark.parametrize(
    "document",
    [
        "- a\n- b\n",
        {"Spider": {"WorkerNumber": "four"}},
        {"Spider": {"TLS": "yes"}},
        {"Spider": ["x"]},
        {"Headers": ["x"]},
    ],
)
def test_parse_setting_rejects_bad_types(document):
    with pytest.raises(ValueError):
        parse_setting(document)


def test_load_from_setting_uses_field_names(manager):
    assert manager.get_setting("Spider.Name") == "demo"
    assert manager.get_setting("Spider.Worker") == "4"
    assert manager.get_setting("Spider.TLS") == "true"
    assert manager.get_setting("Spider.LOGLEVEL") == "debug"
    assert manager.get_setting("Headers.User-Agent") == "duck"
    assert manager.get_setting("Cookies.session") == "token"


def test_yaml_tag_names_are_not_keys(manager):
    assert manager.get_setting("Spider.WorkerNumber") is None
    assert manager.get_int("Spider.WorkerNumber", 8) == 8
    assert manager.get_int("Spider.Worker", 8) == 4


def test_set_then_get_round_trip():
    mgr = SettingManager()
    mgr.set_setting("a.b", "value")
    assert mgr.get_setting("a.b") == "value"
    assert mgr.get_setting("missing") is None


@pytest.mark.parametrize("raw, expected", [("-3", -3), ("+7", 7), ("0", 0)])
def test_get_int_parses(raw, expected):
    mgr = SettingManager()
    mgr.set_setting("k", raw)
    assert mgr.get_int("k", 99) == expected


@pytest.mark.parametrize("raw", ["12x", "", " 4", "1_000", "4.0"])
def test_get_int_falls_back(raw):
    mgr = SettingManager()
    mgr.set_setting("k", raw)
    assert mgr.get_int("k", 99) == 99


@pytest.mark.parametrize("raw", ["1", "t", "T", "TRUE", "true", "True"])
def test_get_bool_true(raw):
    mgr = SettingManager()
    mgr.set_setting("k", raw)
    assert mgr.get_bool("k") is True


@pytest.mark.parametrize("raw", ["0", "f", "false", "yes", ""])
def test_get_bool_false(raw):
    mgr = SettingManager()
    mgr.set_setting("k", raw)
    assert mgr.get_bool("k") is False


def test_get_bool_missing_is_false():
    assert SettingManager().get_bool("nothing") is False