import importlib

import pytest


ENTRYPOINTS = [
    "mip",
]


@pytest.mark.parametrize("module_name", ENTRYPOINTS)
def test_entrypoint_help(module_name):
    module = importlib.import_module(module_name)
    assert hasattr(module, "main"), f"{module_name} missing main()"

    with pytest.raises(SystemExit) as excinfo:
        module.main(["--help"])

    assert excinfo.value.code == 0


@pytest.mark.parametrize("command", ["process", "inspect"])
def test_subcommand_help(command):
    module = importlib.import_module("mip")

    with pytest.raises(SystemExit) as excinfo:
        module.main([command, "--help"])

    assert excinfo.value.code == 0
