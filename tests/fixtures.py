# type: ignore
import pytest

import hexcpu.runtime.cpu as cpu

import unit_utils


@pytest.fixture
def state():
    yield cpu.State()


@pytest.fixture
def factorial_source():
    yield unit_utils.load_file('testdata/factorial.hasm')
