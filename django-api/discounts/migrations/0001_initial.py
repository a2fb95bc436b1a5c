import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
        ("tickets", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Discount",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(blank=True, help_text="The code can be customised", max_length=255, unique=True)),
                ("title", models.CharField(blank=True, max_length=255)),
                ("description", models.TextField(blank=True, help_text="The description is only visible in the admin")),
                (
                    "discount_type",
                    models.CharField(
                        choices=[("PRICE", "Price"), ("PERCENTAGE", "Percentage")],
                        default="PRICE",
                        max_length=20,
                    ),
                ),
                (
                    "applies_to",
                    models.CharField(
                        choices=[("CART", "Cart"), ("EACH_TICKET", "Each ticket")],
                        default="CART",
                        max_length=20,
                    ),
                ),
                ("amount", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("max_uses", models.IntegerField(default=1, help_text='Set to "-1" for unlimited uses')),
                ("valid_from", models.DateTimeField(blank=True, null=True)),
                ("valid_till", models.DateTimeField(blank=True, null=True)),
                ("once_per_email", models.BooleanField(default=False)),
                ("ticket_types", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("events", models.ManyToManyField(blank=True, related_name="discounts", to="tickets.event")),
                ("groups", models.ManyToManyField(blank=True, related_name="discounts", to="auth.group")),
            ],
            options={
                "ordering": ["-valid_from"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("amount__gte", 0)), name="discount_amount_non_negative"
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("max_uses__gte", -1)), name="discount_max_uses_valid"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PriceModification",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("applied_amount", models.DecimalField(decimal_places=2, max_digits=10)),
                ("created_at", models.DateTimeField()),
                (
                    "discount",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="modifications",
                        to="discounts.discount",
                    ),
                ),
                (
                    "reservation",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="price_modifications",
                        to="tickets.reservation",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["discount", "reservation"], name="discounts_p_discoun_4a9e2c_idx"),
                ],
            },
        ),
    ]
