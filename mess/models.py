from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone


def today():
    return timezone.localdate()


MEAL_TYPES = [
    ("breakfast", "Breakfast"),
    ("lunch", "Lunch"),
    ("snacks", "Snacks"),
    ("dinner", "Dinner"),
]
MEAL_ORDER = [meal for meal, _ in MEAL_TYPES]

MEAL_PREFERENCES = [
    ("veg", "Veg"),
    ("non-veg", "Non-Veg"),
]

# Static slot catalog: meal type -> ordered (slot id, display label) pairs.
# Slots carry no capacity; a slot is "available" unless this owner already
# booked the meal type for the day.
SLOT_CATALOG = {
    "breakfast": [
        ("b1", "7:30 AM - 8:00 AM"),
        ("b2", "8:00 AM - 8:30 AM"),
        ("b3", "8:30 AM - 9:00 AM"),
    ],
    "lunch": [
        ("l1", "12:30 PM - 1:00 PM"),
        ("l2", "1:00 PM - 1:30 PM"),
        ("l3", "1:30 PM - 2:00 PM"),
    ],
    "snacks": [
        ("s1", "4:30 PM - 5:00 PM"),
        ("s2", "5:00 PM - 5:30 PM"),
    ],
    "dinner": [
        ("d1", "7:30 PM - 8:00 PM"),
        ("d2", "8:00 PM - 8:30 PM"),
        ("d3", "8:30 PM - 9:00 PM"),
    ],
}


def slot_label(meal_type, slot_id):
    """Return the display label for ``slot_id`` or None if it is not in the catalog."""
    for candidate, label in SLOT_CATALOG.get(meal_type, []):
        if candidate == slot_id:
            return label
    return None


class Profile(models.Model):
    THEMES = [
        ("light", "Light"),
        ("dark", "Dark"),
    ]

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="profile")
    name = models.CharField(max_length=255)
    reg_number = models.CharField(max_length=32, db_index=True)
    room_number = models.CharField(max_length=16, db_index=True)
    phone_number = models.CharField(max_length=15, blank=True, default="")
    avatar = models.URLField(blank=True, default="")
    theme = models.CharField(max_length=5, choices=THEMES, default="light")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "profiles"

    def __str__(self):
        return f"{self.name} ({self.room_number})"


class MenuItem(models.Model):
    name = models.CharField(max_length=255, db_index=True)
    category = models.CharField(max_length=100, db_index=True)
    description = models.TextField(blank=True, null=True)
    vegetarian = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "menu_items"
        ordering = ["name"]

    def __str__(self):
        return self.name


class ScheduledMenu(models.Model):
    date = models.DateField(db_index=True)
    meal_type = models.CharField(max_length=10, choices=MEAL_TYPES)
    items = models.JSONField(default=list)
    published = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "scheduled_menus"
        ordering = ["date", "meal_type"]

    def display_items(self):
        return ", ".join(str(item) for item in self.items or [])

    def __str__(self):
        return f"{self.date} {self.meal_type}"


class DailyMenu(models.Model):
    date = models.DateField(unique=True, default=today)
    breakfast = models.TextField(blank=True, null=True)
    lunch = models.TextField(blank=True, null=True)
    snacks = models.TextField(blank=True, null=True)
    dinner = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "daily_menus"

    def __str__(self):
        return f"Daily menu {self.date}"


class MealBooking(models.Model):
    # No unique constraint on (user, booking_date, meal_type): the duplicate
    # check lives in BookingDesk and is not atomic with the insert.
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="meal_bookings")
    booking_date = models.DateField(db_index=True)
    meal_type = models.CharField(max_length=10, choices=MEAL_TYPES)
    time_slot = models.CharField(max_length=32)
    meal_preference = models.CharField(max_length=7, choices=MEAL_PREFERENCES, default="veg")
    note = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "meal_bookings"
        ordering = ["-booking_date", "-created_at"]

    def __str__(self):
        return f"{self.booking_date} {self.meal_type} at {self.time_slot}"


class Feedback(models.Model):
    RATINGS = [
        ("excellent", "Excellent"),
        ("good", "Good"),
        ("average", "Average"),
        ("poor", "Poor"),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="feedbacks")
    meal_type = models.CharField(max_length=10, choices=MEAL_TYPES)
    rating = models.CharField(max_length=10, choices=RATINGS)
    comment = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "feedbacks"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.user.username}: {self.meal_type} ({self.rating})"


class AdminResponse(models.Model):
    feedback = models.ForeignKey(Feedback, on_delete=models.CASCADE, related_name="responses")
    admin = models.ForeignKey(User, on_delete=models.CASCADE, related_name="feedback_responses")
    response = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "admin_responses"
        ordering = ["created_at"]

    def __str__(self):
        return f"Response to feedback #{self.feedback_id}"


class Complaint(models.Model):
    CATEGORIES = [
        ("food-quality", "Food Quality"),
        ("service", "Service"),
        ("cleanliness", "Cleanliness"),
        ("timing", "Timing Issues"),
        ("facilities", "Facilities"),
        ("other", "Other"),
    ]
    STATUSES = [
        ("pending", "Pending"),
        ("in_progress", "In Progress"),
        ("resolved", "Resolved"),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="complaints")
    subject = models.CharField(max_length=255)
    category = models.CharField(max_length=20, choices=CATEGORIES)
    description = models.TextField()
    status = models.CharField(max_length=12, choices=STATUSES, default="pending", db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "complaints"
        ordering = ["-created_at"]

    def __str__(self):
        return self.subject


class Announcement(models.Model):
    TYPES = [
        ("menu", "Menu"),
        ("timing", "Timing"),
        ("event", "Event"),
        ("general", "General"),
    ]
    PRIORITIES = [
        ("urgent", "Urgent"),
        ("important", "Important"),
        ("normal", "Normal"),
    ]
    STATUSES = [
        ("active", "Active"),
        ("scheduled", "Scheduled"),
        ("expired", "Expired"),
    ]

    title = models.CharField(max_length=255)
    content = models.TextField()
    announcement_type = models.CharField(max_length=10, choices=TYPES, default="general")
    priority = models.CharField(max_length=10, choices=PRIORITIES, default="normal")
    status = models.CharField(max_length=10, choices=STATUSES, default="active", db_index=True)
    is_active = models.BooleanField(default=True, db_index=True)
    expires_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "announcements"
        ordering = ["-created_at"]

    def __str__(self):
        return self.title
