"""Resource descriptor for the API type being scaffolded.

A ``Resource`` carries the group/version/kind identity plus the flags that
shape the generated code.  Name validation follows the Kubernetes naming
rules for API groups, versions and kinds.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

from kubescaffold.errors import ValidationError


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


class GroupVersionKind(BaseModel):
    """Hashable identity key of a resource, as persisted in the project file."""

    model_config = ConfigDict(frozen=True)

    group: str
    version: str
    kind: str

    def __str__(self) -> str:
        return f"{self.group}/{self.version}, Kind={self.kind}"


# API groups served by Kubernetes itself, mapped to the domain that
# qualifies them.  Their Go types live under ``k8s.io/api``.
CORE_GROUPS: dict[str, str] = {
    "admission": "k8s.io",
    "admissionregistration": "k8s.io",
    "apps": "",
    "auditregistration": "k8s.io",
    "apiextensions": "k8s.io",
    "authentication": "k8s.io",
    "authorization": "k8s.io",
    "autoscaling": "",
    "batch": "",
    "certificates": "k8s.io",
    "coordination": "k8s.io",
    "core": "",
    "events": "k8s.io",
    "extensions": "",
    "imagepolicy": "k8s.io",
    "networking": "k8s.io",
    "node": "k8s.io",
    "metrics": "k8s.io",
    "policy": "",
    "rbac.authorization": "k8s.io",
    "scheduling": "k8s.io",
    "setting": "k8s.io",
    "storage": "k8s.io",
}


# ---------------------------------------------------------------------------
# Resource
# ---------------------------------------------------------------------------


class Resource(BaseModel):
    """Identity and generation flags of an API resource."""

    group: str = Field(..., description="API group, without the project domain")
    version: str = Field(..., description="API version, e.g. v1 or v1beta1")
    kind: str = Field(..., description="PascalCase kind, e.g. CronJob")
    namespaced: bool = Field(default=True, description="Whether the resource is namespace-scoped")
    create_example_reconcile_body: bool = Field(
        default=True,
        description="Render an example reconcile body in the controller",
    )
    plural: str | None = Field(default=None, description="Override for the plural resource name")

    @property
    def gvk(self) -> GroupVersionKind:
        return GroupVersionKind(group=self.group, version=self.version, kind=self.kind)

    @property
    def kind_lower(self) -> str:
        return self.kind.lower()

    @property
    def resource_plural(self) -> str:
        """Lower-case plural used for CRD names and kustomize patch files."""
        if self.plural:
            return self.plural
        return pluralize(self.kind_lower)

    @property
    def group_package_name(self) -> str:
        """Go package name for the group (dots and dashes removed)."""
        return re.sub(r"[.-]", "", self.group).lower()

    @property
    def import_alias(self) -> str:
        """Go import alias for the API package, e.g. ``appsv1``."""
        return f"{self.group_package_name}{self.version}"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

_DNS1123_LABEL = r"[a-z0-9]([-a-z0-9]*[a-z0-9])?"
_DNS1123_SUBDOMAIN_RE = re.compile(rf"^{_DNS1123_LABEL}(\.{_DNS1123_LABEL})*$")
_DNS1123_SUBDOMAIN_MAX = 253
_DNS1035_LABEL_RE = re.compile(r"^[a-z]([-a-z0-9]*[a-z0-9])?$")
_DNS1035_LABEL_MAX = 63
_VERSION_RE = re.compile(r"^v\d+(?:alpha\d+|beta\d+)?$")


def validate_resource(resource: Resource) -> None:
    """Raise :class:`ValidationError` if *resource* has a malformed identity."""
    if not resource.group:
        raise ValidationError("group cannot be empty")
    if not resource.version:
        raise ValidationError("version cannot be empty")
    if not resource.kind:
        raise ValidationError("kind cannot be empty")

    if (
        len(resource.group) > _DNS1123_SUBDOMAIN_MAX
        or not _DNS1123_SUBDOMAIN_RE.match(resource.group)
    ):
        raise ValidationError(
            f"group name is invalid: ({resource.group!r}) must be a DNS-1123 "
            "subdomain of lower case alphanumeric characters, '-' or '.'"
        )

    if not _VERSION_RE.match(resource.version):
        raise ValidationError(
            f"version must match ^v\\d+(?:alpha\\d+|beta\\d+)?$ "
            f"(was {resource.version})"
        )

    expected = pascalize(resource.kind)
    if resource.kind != expected:
        raise ValidationError(
            f"kind must be PascalCase (expected {expected} was {resource.kind})"
        )

    if (
        len(resource.kind_lower) > _DNS1035_LABEL_MAX
        or not _DNS1035_LABEL_RE.match(resource.kind_lower)
    ):
        raise ValidationError(
            f"kind is invalid: ({resource.kind!r}) must start with a letter and "
            "contain only alphanumeric characters or '-'"
        )


# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


def pascalize(value: str) -> str:
    """Convert ``foo_bar``, ``foo-bar`` or ``fooBar`` to ``FooBar``."""
    parts = re.split(r"[-_\s.]+", value)
    return "".join(part[:1].upper() + part[1:] for part in parts if part)


_IRREGULAR_PLURALS: dict[str, str] = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "goose": "geese",
}

_UNCOUNTABLE: frozenset[str] = frozenset({
    "data",
    "equipment",
    "information",
    "metadata",
    "series",
    "species",
})


def pluralize(word: str) -> str:
    """Return the English plural of a lower-case *word*.

    Examples::

        pluralize("foo")     -> "foos"
        pluralize("policy")  -> "policies"
        pluralize("box")     -> "boxes"
        pluralize("ingress") -> "ingresses"
    """
    if not word or word in _UNCOUNTABLE:
        return word
    if word in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[word]
    if word.endswith("y") and len(word) > 1 and word[-2] not in "aeiou":
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"
