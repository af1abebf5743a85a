from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import mess.models


MEAL_TYPES = [("breakfast", "Breakfast"), ("lunch", "Lunch"), ("snacks", "Snacks"), ("dinner", "Dinner")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Announcement",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("content", models.TextField()),
                ("announcement_type", models.CharField(choices=[("menu", "Menu"), ("timing", "Timing"), ("event", "Event"), ("general", "General")], default="general", max_length=10)),
                ("priority", models.CharField(choices=[("urgent", "Urgent"), ("important", "Important"), ("normal", "Normal")], default="normal", max_length=10)),
                ("status", models.CharField(choices=[("active", "Active"), ("scheduled", "Scheduled"), ("expired", "Expired")], db_index=True, default="active", max_length=10)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "announcements",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="DailyMenu",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField(default=mess.models.today, unique=True)),
                ("breakfast", models.TextField(blank=True, null=True)),
                ("lunch", models.TextField(blank=True, null=True)),
                ("snacks", models.TextField(blank=True, null=True)),
                ("dinner", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "daily_menus",
            },
        ),
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("category", models.CharField(db_index=True, max_length=100)),
                ("description", models.TextField(blank=True, null=True)),
                ("vegetarian", models.BooleanField(db_index=True, default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "menu_items",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="ScheduledMenu",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField(db_index=True)),
                ("meal_type", models.CharField(choices=MEAL_TYPES, max_length=10)),
                ("items", models.JSONField(default=list)),
                ("published", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "scheduled_menus",
                "ordering": ["date", "meal_type"],
            },
        ),
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("reg_number", models.CharField(db_index=True, max_length=32)),
                ("room_number", models.CharField(db_index=True, max_length=16)),
                ("phone_number", models.CharField(blank=True, default="", max_length=15)),
                ("avatar", models.URLField(blank=True, default="")),
                ("theme", models.CharField(choices=[("light", "Light"), ("dark", "Dark")], default="light", max_length=5)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="profile", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "profiles",
            },
        ),
        migrations.CreateModel(
            name="MealBooking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("booking_date", models.DateField(db_index=True)),
                ("meal_type", models.CharField(choices=MEAL_TYPES, max_length=10)),
                ("time_slot", models.CharField(max_length=32)),
                ("meal_preference", models.CharField(choices=[("veg", "Veg"), ("non-veg", "Non-Veg")], default="veg", max_length=7)),
                ("note", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="meal_bookings", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "meal_bookings",
                "ordering": ["-booking_date", "-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Feedback",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("meal_type", models.CharField(choices=MEAL_TYPES, max_length=10)),
                ("rating", models.CharField(choices=[("excellent", "Excellent"), ("good", "Good"), ("average", "Average"), ("poor", "Poor")], max_length=10)),
                ("comment", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="feedbacks", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "feedbacks",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="AdminResponse",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("response", models.TextField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("admin", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="feedback_responses", to=settings.AUTH_USER_MODEL)),
                ("feedback", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="responses", to="mess.feedback")),
            ],
            options={
                "db_table": "admin_responses",
                "ordering": ["created_at"],
            },
        ),
        migrations.CreateModel(
            name="Complaint",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("subject", models.CharField(max_length=255)),
                ("category", models.CharField(choices=[("food-quality", "Food Quality"), ("service", "Service"), ("cleanliness", "Cleanliness"), ("timing", "Timing Issues"), ("facilities", "Facilities"), ("other", "Other")], max_length=20)),
                ("description", models.TextField()),
                ("status", models.CharField(choices=[("pending", "Pending"), ("in_progress", "In Progress"), ("resolved", "Resolved")], db_index=True, default="pending", max_length=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="complaints", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "complaints",
                "ordering": ["-created_at"],
            },
        ),
    ]
