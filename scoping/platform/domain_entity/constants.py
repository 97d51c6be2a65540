"""
Domain Entity Constants
Field names, behaviors and configuration keys shared across the module.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


# The name of the access control field.
FIELD_NAME = "domain_access"

# Entity type the access field references.
TARGET_TYPE = "domain"

# Field storage cardinality meaning "any number of values".
CARDINALITY_UNLIMITED = -1

FIELD_LABEL = "Domain Access"
FIELD_DESCRIPTION = "Select the affiliate domain(s). If nothing was selected: Affiliated to all domains."

# Dotted path of the callback computing default values for new entities.
DEFAULT_VALUE_CALLBACK = "scoping.platform.domain_entity.mapper.field_default_domains"

# Widget used on the entity creation form.
FIELD_WIDGET = "options_buttons"

# Pseudo domain id standing for "the domain of the current request".
DOMAIN_ACTIVE = "_active"


class Behavior(models.TextChoices):
    """How an entity of a bundle gets its domain affiliation."""
    # Entity is automatically assigned to the default value (hidden for user).
    AUTO = "auto", _("Affiliate automatically created entity to a value (no widget on entity creation form, auto-assignation)")
    # User chooses the affiliation on the creation/update form.
    USER = "user", _("User choose affiliate, with a default value (form widget on the entity creation form)")


BEHAVIOR_AUTO = Behavior.AUTO.value
BEHAVIOR_USER = Behavior.USER.value


class DisplayContext(models.TextChoices):
    FORM = "form", "Form"
    VIEW = "view", "View"


DEFAULT_MODE = "default"

# Persisted configuration
SETTINGS_NAME = "domain_entity.settings"
BYPASS_ACCESS_CONDITIONS = "bypass_access_conditions"

# Permission required for both configuration screens.
ADMINISTER_PERMISSION = "domain_entity.administer_domains"

# Audit actions
AUDIT_TARGET_TYPE = "domain_entity"
AUDIT_ENTITY_TYPES_SAVED = "domain_entity.entity_types_saved"
AUDIT_BUNDLES_SAVED = "domain_entity.bundles_saved"

WARNING_EXISTING_ENTITIES = _(
    "* Beware you have entities of this type in your database, all unassigned entities will be "
    "assigned to the chosen default domain value(s), if you select \"current domain\" the unassigned "
    "entities will be assigned to the current domain. You can change the default value afterward "
    "without altering the existing entities domain value(s)."
)
