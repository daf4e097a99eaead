import logging

from django.core.management.base import BaseCommand
from django.db import transaction

from core.dev_utils import create_demo_users, create_demo_locations, create_demo_catalog

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Carga usuarios, ubicaciones y catálogo de ejemplo para desarrollo'

    @transaction.atomic
    def handle(self, *args, **options):
        admin, customer = create_demo_users()
        localities = create_demo_locations()
        products = create_demo_catalog()

        logger.info("Datos demo cargados: %d localidades, %d productos", len(localities), len(products))
        self.stdout.write(self.style.SUCCESS(
            f'Usuarios: {admin.email}, {customer.email} | '
            f'Localidades: {len(localities)} | Productos: {len(products)}'
        ))
