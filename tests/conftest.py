"""Shared test fixtures and manifest samples."""

from pathlib import Path
from typing import Callable

import pytest

from arc_config_validator.utils.logging_utils import reset_package_logging


CLEAN_RUNNER = """\
apiVersion: actions.summerwind.dev/v1alpha1
kind: RunnerDeployment
metadata:
  name: example-runner
  namespace: arc-runners
spec:
  replicas: 1
  template:
    spec:
      repository: example-org/example-repo
      securityContext:
        runAsNonRoot: true
        runAsUser: 1000
      resources:
        requests:
          cpu: "1"
          memory: 2Gi
        limits:
          cpu: "2"
          memory: 4Gi
"""

CLEAN_POLICY = """\
apiVersion: v1
kind: ConfigMap
metadata:
  name: runner-policy
  namespace: arc-systems
data:
  policy.yaml: |
    runner:
      securityContext:
        runAsNonRoot: true
"""

ROOT_POLICY = """\
apiVersion: v1
kind: ConfigMap
metadata:
  name: runner-policy
  namespace: arc-systems
data:
  policy.yaml: |
    runner:
      securityContext:
        runAsNonRoot: false
"""

BROKEN_YAML = """\
apiVersion: v1
kind: ConfigMap
metadata: {name: [unbalanced
"""


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    reset_package_logging()


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    """Write ``content`` to ``tmp_path / relative`` and return the path."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write
