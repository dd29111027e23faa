"""Shared fixtures for tfexplorer tests."""

from typing import Any, AsyncIterator, Dict, List, Optional

import pytest

from tfexplorer.backends.base import StateBackend
from tfexplorer.models.environment import BackendVersion, Environment
from tfexplorer.models.terraform_state import TerraformState


SAMPLE_STATE: Dict[str, Any] = {
    "version": 3,
    "terraform_version": "0.11.7",
    "serial": 42,
    "lineage": "5a1f0c3e-0000-0000-0000-000000000000",
    "modules": [
        {
            "path": ["root"],
            "outputs": {
                "foo": {"sensitive": False, "type": "string", "value": "bar"},
                "subnets": {
                    "sensitive": False,
                    "type": "list",
                    "value": ["subnet-a", "subnet-b"],
                },
                "tags": {"sensitive": False, "type": "map", "value": {"env": "prod"}},
            },
            "resources": {
                "aws_instance.web": {
                    "type": "aws_instance",
                    "depends_on": [],
                    "primary": {
                        "id": "i-123",
                        "attributes": {"id": "i-123", "ami": "ami-456"},
                        "meta": {},
                    },
                    "provider": "provider.aws",
                },
                "data.aws_ami.pending": {
                    "type": "aws_ami",
                    "depends_on": [],
                    "primary": None,
                    "provider": "provider.aws",
                },
            },
        },
        {
            "path": ["root", "child"],
            "outputs": {"vpc_id": {"sensitive": False, "type": "string", "value": "vpc-1"}},
            "resources": {
                "aws_vpc.main": {
                    "type": "aws_vpc",
                    "depends_on": [],
                    "primary": {"id": "vpc-1", "attributes": {"cidr_block": "10.0.0.0/16"}},
                    "provider": "provider.aws",
                }
            },
        },
    ],
}


class FakeBackend(StateBackend):
    """In-memory backend; optionally fails discovery after `fail_after` environments."""

    def __init__(
        self,
        version: BackendVersion,
        names: List[str],
        states: Optional[Dict[str, Any]] = None,
        fail_after: Optional[int] = None,
        load_error: Optional[Exception] = None,
    ) -> None:
        self.version = version
        self.names = names
        self.states = states or {}
        self.fail_after = fail_after
        self.load_error = load_error
        self.loaded: List[str] = []

    async def discover(self) -> AsyncIterator[Environment]:
        from tfexplorer.errors import NetworkError

        for index, name in enumerate(self.names):
            if self.fail_after is not None and index >= self.fail_after:
                raise NetworkError("connection reset")
            yield Environment(name=name, version=self.version)

    async def load_state(self, environment: Environment) -> TerraformState:
        self.loaded.append(environment.name)
        if self.load_error is not None:
            raise self.load_error
        return TerraformState.model_validate(self.states[environment.name])


@pytest.fixture
def sample_state() -> TerraformState:
    return TerraformState.model_validate(SAMPLE_STATE)


@pytest.fixture
def other_state() -> Dict[str, Any]:
    return {
        "version": 3,
        "modules": [
            {
                "path": ["root"],
                "outputs": {"region": {"type": "string", "value": "us-west-2"}},
                "resources": {},
            }
        ],
    }
