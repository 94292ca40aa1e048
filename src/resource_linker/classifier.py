"""Link classification of method facts."""

from typing import Optional

from .errors import AmbiguousLinkKind, UnresolvableRelationalTarget
from .models import ClassName, LinkKind, RelationalLink, SelfLink


def classify_link(has_self: bool,
                  has_relational: bool,
                  target: Optional[str] = None,
                  subject: str = "<unknown>") -> LinkKind:
    """
    Classify a method as the self link of its class or a relational link.

    Raises:
        AmbiguousLinkKind: If both or neither markers are present
        UnresolvableRelationalTarget: If a relational target is not a class name
    """
    if has_self == has_relational:
        raise AmbiguousLinkKind(subject)
    if has_self:
        return SelfLink()

    try:
        return RelationalLink(ClassName.value_of(target))
    except ValueError:
        raise UnresolvableRelationalTarget(subject, target) from None
