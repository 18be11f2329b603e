import io

import pytest

from arbor.exceptions import FlagError, FlagNotDefinedError, FlagRedefinedError
from arbor.flags import FlagSet, FlagType
from arbor.signals import HelpSignal


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def flags(output):
    flags = FlagSet("test", output=output)
    flags.add("output", "o", default="out", usage="output directory")
    flags.add("verbose", "v", type=FlagType.BOOL, usage="verbose output")
    flags.add("num", "n", type=FlagType.INT)
    return flags


def test_str():
    flags = FlagSet("test")
    assert str(flags) == "FlagSet(name='test', flags=0, shorthands=0, parsed=False)"
    flags.add("aaaa", "a")
    flags.add("verbose")
    assert repr(flags) == "FlagSet(name='test', flags=2, shorthands=1, parsed=False)"


def test_attached_short_value(output):
    flags = FlagSet("test", output=output)
    flags.add("aaaa", "a", "YOUR NAME", "author name for copyright attribution")
    flags.add("ddd", "d", "YOUR NAME", "author name for copyright attribution")

    flags.parse(["-a123"])

    assert flags.get("aaaa") == "123"
    assert flags.get("ddd") == "YOUR NAME"
    assert flags.changed("aaaa") is True
    assert flags.changed("ddd") is False
    assert flags.parsed is True


@pytest.mark.parametrize(
    "args",
    [
        ["-o", "dist"],
        ["-odist"],
        ["-o=dist"],
        ["--output", "dist"],
        ["--output=dist"],
    ],
)
def test_value_forms(flags, args):
    flags.parse(args)
    assert flags.get("output") == "dist"
    assert flags.args == []


def test_empty_long_value(flags):
    flags.parse(["--output="])
    assert flags.get("output") == ""
    assert flags.changed("output") is True


def test_bool_flags(flags):
    flags.parse(["--verbose"])
    assert flags.get("verbose") is True

    flags.parse(["--verbose=false"])
    assert flags.get("verbose") is False


def test_count_flag():
    flags = FlagSet("test")
    flags.add("verbose", "v", type=FlagType.COUNT)
    flags.parse(["-vvv", "--verbose"])
    assert flags.get("verbose") == 4


def test_string_list_flag():
    flags = FlagSet("test")
    flags.add("tag", "t", type=FlagType.STRING_LIST, default=["default"])
    assert flags.get("tag") == ["default"]

    flags.parse(["--tag", "a,b", "-t", "c"])
    assert flags.get("tag") == ["a", "b", "c"]


def test_invalid_value(flags, output):
    with pytest.raises(FlagError, match='invalid argument "abc" for "-n, --num" flag'):
        flags.parse(["--num", "abc"])
    assert 'invalid argument "abc"' in output.getvalue()


def test_posix_bundling(flags):
    flags.parse(["-vo", "build"])
    assert flags.get("verbose") is True
    assert flags.get("output") == "build"
    assert flags.args == []


def test_posix_bundling_attached_value(flags):
    flags.parse(["-vodist", "src"])
    assert flags.get("verbose") is True
    assert flags.get("output") == "dist"
    assert flags.args == ["src"]


def test_interspersed_positionals(flags):
    flags.parse(["a", "-v", "b", "--", "-c", "--output"])
    assert flags.args == ["a", "b", "-c", "--output"]
    assert flags.get("verbose") is True
    assert flags.get("output") == "out"


def test_single_dash_is_positional(flags):
    flags.parse(["-"])
    assert flags.args == ["-"]


def test_parse_resets_args(flags):
    flags.parse(["a", "b"])
    flags.parse(["c"])
    assert flags.args == ["c"]


@pytest.mark.parametrize(
    "args, message",
    [
        (["--nope"], "unknown flag: --nope"),
        (["-x"], "unknown shorthand flag: 'x' in -x"),
        (["-vx"], "unknown shorthand flag: 'x' in -vx"),
        (["--output"], "flag needs an argument: --output"),
        (["-o"], "flag needs an argument: 'o' in -o"),
        (["---x"], "bad flag syntax: ---x"),
    ],
)
def test_parse_errors(flags, output, args, message):
    with pytest.raises(FlagError) as error:
        flags.parse(args)
    assert str(error.value) == message
    assert output.getvalue() == f"{message}\n"


@pytest.mark.parametrize("args", [["--help"], ["-h"], ["-vh"]])
def test_undefined_help_raises_help_signal(flags, args):
    with pytest.raises(HelpSignal):
        flags.parse(args)


def test_defined_help_flag_is_parsed():
    flags = FlagSet("test")
    flags.add("help", "h", type=FlagType.BOOL)
    flags.parse(["-h"])
    assert flags.get("help") is True


def test_deprecated_flag(output):
    flags = FlagSet("test", output=output)
    flags.add("old", deprecated="use --new instead")
    flags.parse(["--old", "x"])
    assert flags.get("old") == "x"
    assert output.getvalue() == "Flag --old has been deprecated, use --new instead\n"


def test_get_not_defined(flags):
    with pytest.raises(FlagNotDefinedError, match="flag accessed but not defined: nope"):
        flags.get("nope")
    assert flags.changed("nope") is False


def test_redefinition():
    flags = FlagSet("test")
    flags.add("name", "n")
    with pytest.raises(FlagRedefinedError, match="flag redefined: name"):
        flags.add("name")
    with pytest.raises(FlagRedefinedError, match="'n' shorthand"):
        flags.add("number", "n")
    assert len(flags) == 1


@pytest.mark.parametrize("name, shorthand", [("", ""), ("-name", ""), ("name", "ab")])
def test_invalid_definitions(name, shorthand):
    flags = FlagSet("test")
    with pytest.raises(FlagError) as error:
        flags.add(name, shorthand)
    assert not isinstance(error.value, FlagRedefinedError)
    assert len(flags) == 0


def test_add_flag_set_shares_flags():
    source = FlagSet("source")
    flag = source.add("global", "g", "default")
    target = FlagSet("target")
    target.add("local", "l")

    target.add_flag_set(source)

    assert target.lookup("global") is flag
    assert target.shorthand_lookup("g") is flag
    assert len(source) == 1
    assert len(target) == 2

    target.parse(["-ghello"])
    assert source.get("global") == "hello"


def test_add_flag_set_keeps_existing_definition():
    source = FlagSet("source")
    source.add("name", default="source")
    target = FlagSet("target")
    target.add("name", default="target")

    target.add_flag_set(source)

    assert target.get("name") == "target"


def test_add_flag_set_none():
    flags = FlagSet("test")
    flags.add_flag_set(None)
    assert len(flags) == 0


def test_available_flags():
    flags = FlagSet("test")
    assert flags.has_flags() is False
    assert flags.has_available_flags() is False

    flags.add("secret", hidden=True)
    assert flags.has_flags() is True
    assert flags.has_available_flags() is False

    flags.add("visible")
    assert flags.has_available_flags() is True


def test_hidden_flag_still_parses():
    flags = FlagSet("test")
    flags.add("secret", hidden=True)
    flags.parse(["--secret", "x"])
    assert flags.get("secret") == "x"


def test_flag_usages():
    flags = FlagSet("test")
    flags.add("verbose", type=FlagType.BOOL, usage="verbose output")
    flags.add("aaaa", "a", "YOUR NAME", "author name")
    flags.add("secret", hidden=True)
    flags.add("count", "c", type=FlagType.INT, default=3, usage="how many")

    assert flags.flag_usages() == (
        '  -a, --aaaa string   author name (default "YOUR NAME")\n'
        "  -c, --count int     how many (default 3)\n"
        "      --verbose       verbose output"
    )


def test_flag_usages_empty():
    flags = FlagSet("test")
    flags.add("secret", hidden=True)
    assert flags.flag_usages() == ""


def test_output_defaults_to_stderr(capsys):
    flags = FlagSet("test")
    with pytest.raises(FlagError):
        flags.parse(["--nope"])
    assert "unknown flag: --nope" in capsys.readouterr().err


def test_contains_and_iter(flags):
    assert "output" in flags
    assert "nope" not in flags
    assert [flag.name for flag in flags] == ["output", "verbose", "num"]


def test_add_flag_set_is_all_or_nothing():
    source = FlagSet("source")
    source.add("alpha", "a")
    source.add("debug", "d")
    target = FlagSet("target")
    target.add("dry", "d")

    with pytest.raises(FlagRedefinedError, match="'d' shorthand in 'target' flagset"):
        target.add_flag_set(source)

    assert "alpha" not in target
    assert "debug" not in target
    assert target.shorthand_lookup("d").name == "dry"


def test_add_flag_set_skipped_name_does_not_clash():
    source = FlagSet("source")
    source.add("dry", "x")
    target = FlagSet("target")
    target.add("dry", "d")
    target.add("xray", "x")

    target.add_flag_set(source)

    assert target.shorthand_lookup("x").name == "xray"


def test_clear_keeps_positionals(flags):
    flags.parse(["a", "-v"])
    flags.clear()
    assert len(flags) == 0
    assert flags.shorthand_lookup("v") is None
    assert flags.args == ["a"]
    flags.add("verbose", "v")
