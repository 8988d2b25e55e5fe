from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ScheduleSnapshot",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("source_url", models.CharField(blank=True, max_length=500)),
                ("document", models.JSONField(blank=True, default=dict)),
                ("synchronized_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-synchronized_at", "-id"],
                "get_latest_by": ["synchronized_at", "id"],
            },
        ),
    ]
