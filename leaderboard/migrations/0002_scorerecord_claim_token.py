from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("leaderboard", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="scorerecord",
            name="claim_token",
            field=models.CharField(
                blank=True,
                editable=False,
                help_text="Token of the cached score this row was claimed from",
                max_length=32,
                null=True,
                unique=True,
            ),
        ),
    ]
