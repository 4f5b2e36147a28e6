import pytest

from schnorrchain import DEFAULT_PARAMS, ModPGroup, SchnorrParams, generate_key_pair

# safe prime 2039 = 2·1019 + 1; 4 = 2² generates the order-1019 subgroup
TINY_GROUP = ModPGroup(p=2039, q=1019, g=4)


@pytest.fixture
def params():
    return DEFAULT_PARAMS


@pytest.fixture
def tiny_params():
    return SchnorrParams(group=TINY_GROUP)


@pytest.fixture
def key_a(params):
    return generate_key_pair(params)


@pytest.fixture
def key_b(params):
    return generate_key_pair(params)
