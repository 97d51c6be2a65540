from rest_framework.exceptions import NotFound


class EntityKindNotFound(NotFound):
    default_detail = "Entity type not found."
    default_code = "entity_type_not_found"

    def __init__(self, entity_type_id=None, bundle=None):
        if entity_type_id and bundle:
            detail = f"Bundle '{bundle}' of entity type '{entity_type_id}' not found."
        elif entity_type_id:
            detail = f"Entity type '{entity_type_id}' not found."
        else:
            detail = None
        super().__init__(detail)
        self.entity_type_id = entity_type_id
        self.bundle = bundle
