import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CardSet",
            fields=[
                ("id", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=200)),
                ("is_custom", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ["is_custom", "id"],
            },
        ),
        migrations.CreateModel(
            name="Card",
            fields=[
                ("id", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("term", models.CharField(max_length=32)),
                ("readings", models.JSONField(default=list)),
                ("meanings", models.JSONField(default=list)),
                ("examples", models.JSONField(blank=True, default=list)),
                (
                    "card_set",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cards",
                        to="catalog.cardset",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
            },
        ),
    ]
