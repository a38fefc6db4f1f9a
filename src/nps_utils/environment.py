"""Platform and continuous-integration predicates.

Both predicates read the live process state on every call so that callers
(and tests) can change ``sys.platform`` or the environment between calls.
"""

# Standard library imports
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple, Union

# Local imports
from .utils.logger import get_logger

logger = get_logger(__name__)

# Variables set by most CI providers regardless of vendor
GENERIC_CI_VARIABLES: Tuple[str, ...] = (
    "CI",
    "CONTINUOUS_INTEGRATION",
    "BUILD_NUMBER",
    "RUN_ID",
)

FALSY_VALUES = ("", "false", "0")


@dataclass(frozen=True)
class CIVendor:
    """Environment signature of a CI provider.

    Attributes:
        name: Human readable vendor name
        env: Either variable names that must all be set, or a mapping of
            variable name to the value it must hold
    """

    name: str
    env: Union[Tuple[str, ...], Mapping[str, str]]

    def matches(self, environ: Mapping[str, str]) -> bool:
        if isinstance(self.env, tuple):
            return all(_is_truthy(environ.get(key)) for key in self.env)
        return all(environ.get(key) == value for key, value in self.env.items())


CI_VENDORS: Tuple[CIVendor, ...] = (
    CIVendor("AppVeyor", ("APPVEYOR",)),
    CIVendor("Azure Pipelines", ("SYSTEM_TEAMFOUNDATIONCOLLECTIONURI",)),
    CIVendor("Bamboo", ("bamboo_planKey",)),
    CIVendor("Bitbucket Pipelines", ("BITBUCKET_COMMIT",)),
    CIVendor("Bitrise", ("BITRISE_IO",)),
    CIVendor("Buddy", ("BUDDY_WORKSPACE_ID",)),
    CIVendor("Buildkite", ("BUILDKITE",)),
    CIVendor("CircleCI", ("CIRCLECI",)),
    CIVendor("Cirrus CI", ("CIRRUS_CI",)),
    CIVendor("AWS CodeBuild", ("CODEBUILD_BUILD_ARN",)),
    CIVendor("Codeship", {"CI_NAME": "codeship"}),
    CIVendor("Drone", ("DRONE",)),
    CIVendor("dsari", ("DSARI",)),
    CIVendor("GitHub Actions", ("GITHUB_ACTIONS",)),
    CIVendor("GitLab CI", ("GITLAB_CI",)),
    CIVendor("GoCD", ("GO_PIPELINE_LABEL",)),
    CIVendor("Hudson", ("HUDSON_URL",)),
    CIVendor("Jenkins", ("JENKINS_URL", "BUILD_ID")),
    CIVendor("Magnum CI", ("MAGNUM",)),
    CIVendor("Netlify CI", ("NETLIFY_BUILD_BASE",)),
    CIVendor("Sail CI", ("SAILCI",)),
    CIVendor("Semaphore", ("SEMAPHORE",)),
    CIVendor("Shippable", ("SHIPPABLE",)),
    CIVendor("Solano CI", ("TDDIUM",)),
    CIVendor("Strider CD", ("STRIDER",)),
    CIVendor("TaskCluster", ("TASK_ID", "RUN_ID")),
    CIVendor("TeamCity", ("TEAMCITY_VERSION",)),
    CIVendor("Travis CI", ("TRAVIS",)),
)


def _is_truthy(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() not in FALSY_VALUES


def is_windows() -> bool:
    """Return True when running on Windows, including Cygwin and MSYS shells."""
    return sys.platform == "win32" or os.environ.get("OSTYPE") in ("cygwin", "msys")


def ci_vendor() -> Optional[str]:
    """Return the name of the detected CI vendor, if any."""
    for vendor in CI_VENDORS:
        if vendor.matches(os.environ):
            return vendor.name
    return None


def is_ci() -> bool:
    """Return True when the current process runs on a CI server."""
    if any(_is_truthy(os.environ.get(key)) for key in GENERIC_CI_VARIABLES):
        return True
    vendor = ci_vendor()
    if vendor:
        logger.debug("Detected CI vendor: %s", vendor)
    return vendor is not None
