import django.core.validators
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ScoreRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("wpm", models.PositiveIntegerField()),
                ("raw_wpm", models.PositiveIntegerField()),
                ("accuracy", models.PositiveSmallIntegerField(validators=[django.core.validators.MaxValueValidator(100)])),
                ("mode", models.CharField(choices=[("time", "Time"), ("words", "Words")], max_length=5)),
                ("config", models.PositiveIntegerField(help_text="Seconds in time mode, word count in words mode")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "leaderboard",
                "ordering": ("-wpm", "created_at"),
                "indexes": [
                    models.Index(fields=["mode", "config", "-wpm"], name="leaderboard_mode_cfg_wpm"),
                ],
            },
        ),
    ]
