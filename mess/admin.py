from django.contrib import admin
from . import models
from django.http import HttpResponse
import csv

# Register your models here.
admin.site.register(models.Profile)
admin.site.register(models.MenuItem)
admin.site.register(models.ScheduledMenu)
admin.site.register(models.DailyMenu)
admin.site.register(models.AdminResponse)


@admin.action(description="Export selected to CSV")
def export_as_csv(modeladmin, request, queryset):
    response = HttpResponse(content_type='text/csv')
    response['Content-Disposition'] = 'attachment; filename=meal_bookings.csv'
    writer = csv.writer(response)
    writer.writerow(['User', 'Date', 'Meal', 'Time Slot', 'Preference', 'Note', 'Booked At'])
    for obj in queryset:
        writer.writerow([
            obj.user.username,
            obj.booking_date.isoformat(),
            obj.meal_type,
            obj.time_slot,
            obj.meal_preference,
            obj.note or '',
            obj.created_at.strftime("%Y-%m-%d %H:%M"),
        ])
    return response


@admin.register(models.MealBooking)
class MealBookingAdmin(admin.ModelAdmin):
    list_display = ('user', 'booking_date', 'meal_type', 'time_slot', 'meal_preference', 'created_at')
    list_filter = ('meal_type', 'meal_preference', 'booking_date')
    search_fields = ('user__username', 'user__profile__name', 'user__profile__room_number')
    actions = [export_as_csv]


@admin.register(models.Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = ('subject', 'user', 'category', 'status', 'created_at')
    list_filter = ('status', 'category')
    search_fields = ('subject', 'description', 'user__profile__name', 'user__profile__reg_number')


@admin.register(models.Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = ('user', 'meal_type', 'rating', 'short_comment', 'created_at')
    list_filter = ('meal_type', 'rating')

    def short_comment(self, obj):
        comment = obj.comment or ''
        return (comment[:50] + '...') if len(comment) > 50 else comment
    short_comment.short_description = 'Comment'


@admin.register(models.Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ('title', 'announcement_type', 'priority', 'status', 'is_active', 'expires_at')
    list_filter = ('status', 'announcement_type', 'priority', 'is_active')
    search_fields = ('title', 'content')
