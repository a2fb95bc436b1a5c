from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("discounts", "0001_initial"),
    ]

    operations = [
        migrations.RemoveIndex(
            model_name="pricemodification",
            name="discounts_p_discoun_4a9e2c_idx",
        ),
        migrations.AddConstraint(
            model_name="pricemodification",
            constraint=models.UniqueConstraint(
                fields=("discount", "reservation"), name="discount_once_per_reservation"
            ),
        ),
    ]
