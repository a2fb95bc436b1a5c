"""Django signals for discount defaults."""

import logging

from django.db.models.signals import pre_save
from django.dispatch import receiver
from django.utils import timezone

from discounts.conf import get_setting
from discounts.domain.codes import generate_code
from discounts.domain.errors import CodeGenerationError
from discounts.models import Discount
from discounts.stores.django_store import DjangoDiscountStore

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Discount)
def populate_discount_defaults(sender, instance, **kwargs):
    """Give a discount without a code a generated one, and a title."""
    if not instance.code:
        instance.code = _unused_code()
        logger.info("Generated code %s for new discount", instance.code)
    if not instance.title:
        instance.title = instance.code


def _unused_code() -> str:
    store = DjangoDiscountStore()
    prefix = get_setting("CODE_PREFIX")
    for _ in range(get_setting("CODE_GENERATION_ATTEMPTS")):
        code = generate_code(prefix, timezone.now())
        if not store.code_exists(code):
            return code
    raise CodeGenerationError()
