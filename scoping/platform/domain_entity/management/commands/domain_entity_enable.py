"""
Management command to enable domain access on entity types from the command line.
Run: python manage.py domain_entity_enable --entity-type event --bundle conference --behavior user --domain d1
"""

from django.core.management.base import BaseCommand, CommandError

from scoping.platform.domain_entity.constants import Behavior
from scoping.platform.domain_entity.exceptions import EntityKindNotFound
from scoping.platform.domain_entity.mapper import DomainEntityMapper
from scoping.platform.domain_entity.reconciler import filter_selected
from scoping.platform.domain_entity.services import get_domain_options


class Command(BaseCommand):
    help = 'Enable (or disable) the domain access field on an entity type and its bundles'

    def add_arguments(self, parser):
        parser.add_argument('--entity-type', required=True, help='Entity type id')
        parser.add_argument(
            '--bundle',
            action='append',
            dest='bundles',
            default=[],
            help='Bundle to enable (repeatable, defaults to all bundles)',
        )
        parser.add_argument(
            '--behavior',
            choices=Behavior.values,
            help='Behavior of the enabled bundles',
        )
        parser.add_argument(
            '--domain',
            action='append',
            dest='domains',
            default=None,
            help='Default domain of the enabled bundles (repeatable)',
        )
        parser.add_argument(
            '--disable',
            action='store_true',
            help='Delete the field storage of the entity type and all its bundle fields',
        )

    def handle(self, *args, **options):
        mapper = DomainEntityMapper()
        entity_type_id = options['entity_type']
        definition = mapper.registry.get_definition(entity_type_id)
        if definition is None or not definition.fieldable:
            raise CommandError(f"Unknown entity type: {entity_type_id}")

        if options['disable']:
            mapper.delete_field_storage(entity_type_id)
            self.stdout.write(self.style.SUCCESS(f'Disabled domain access on {entity_type_id}'))
            return

        bundles = options['bundles'] or [bundle.id for bundle in definition.bundles]
        missing = [bundle for bundle in bundles if not definition.has_bundle(bundle)]
        if missing:
            raise CommandError(f"Unknown bundles of {entity_type_id}: {', '.join(missing)}")

        domains = options['domains']
        if domains is not None:
            domains = filter_selected(domains)
            available = get_domain_options()
            unknown = [domain_id for domain_id in domains if domain_id not in available]
            if unknown:
                raise CommandError(f"Unknown domains: {', '.join(unknown)}")

        mapper.create_field_storage(entity_type_id)
        for bundle in bundles:
            try:
                field = mapper.add_domain_field(entity_type_id, bundle)
            except EntityKindNotFound as exc:
                raise CommandError(str(exc.detail)) from exc

            changed = []
            if options['behavior'] and field.behavior != options['behavior']:
                field.behavior = options['behavior']
                changed.append('behavior')
            if domains is not None and list(field.default_domains) != domains:
                field.default_domains = list(domains)
                changed.append('default_domains')
            if changed:
                field.save()
                self.stdout.write(f'  Updated {field.config_id}: {", ".join(changed)}')
            else:
                self.stdout.write(f'  {field.config_id} up to date')

        self.stdout.write(self.style.SUCCESS(f'Enabled domain access on {entity_type_id}: {", ".join(bundles)}'))
