from rest_framework import serializers
from django.contrib.auth.models import User

from .models import MEAL_TYPES, MEAL_PREFERENCES, Profile, MenuItem, ScheduledMenu, DailyMenu, \
    MealBooking, Feedback, AdminResponse, Complaint, Announcement
from .utils import resolve_date_keyword


class FlexibleDateField(serializers.Field):
    """Accepts ISO dates as well as "today", "tomorrow" and loose input like "10 Apr"."""

    def to_internal_value(self, data):
        try:
            value = resolve_date_keyword(data)
        except ValueError as exc:
            raise serializers.ValidationError(str(exc))
        if value is None:
            if self.allow_null:
                return None
            raise serializers.ValidationError("A date is required.")
        return value

    def to_representation(self, value):
        return value.isoformat()


######## BOOKINGS

class MealBookingSerializer(serializers.ModelSerializer):
    class Meta:
        model = MealBooking
        fields = ['id', 'user', 'booking_date', 'meal_type', 'time_slot',
                  'meal_preference', 'note', 'created_at']
        read_only_fields = fields


class SelectSlotSerializer(serializers.Serializer):
    date = FlexibleDateField()
    meal_type = serializers.ChoiceField(choices=MEAL_TYPES)
    slot_id = serializers.CharField(max_length=8)


class ClearSelectionSerializer(serializers.Serializer):
    date = FlexibleDateField()
    meal_type = serializers.ChoiceField(choices=MEAL_TYPES, required=False)


class SubmitBookingSerializer(serializers.Serializer):
    date = FlexibleDateField(required=False, allow_null=True)
    meal_preference = serializers.ChoiceField(choices=MEAL_PREFERENCES, required=False, allow_null=True)
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)


######## MENUS

class MenuItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = MenuItem
        fields = ['id', 'name', 'category', 'description', 'vegetarian', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class ScheduledMenuSerializer(serializers.ModelSerializer):
    items = serializers.ListField(child=serializers.CharField(max_length=255), allow_empty=False)

    class Meta:
        model = ScheduledMenu
        fields = ['id', 'date', 'meal_type', 'items', 'published', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class DailyMenuSerializer(serializers.ModelSerializer):
    class Meta:
        model = DailyMenu
        fields = ['id', 'date', 'breakfast', 'lunch', 'snacks', 'dinner', 'created_at', 'updated_at']
        read_only_fields = ['date', 'created_at', 'updated_at']


######## ANNOUNCEMENTS, COMPLAINTS, FEEDBACK

class AnnouncementSerializer(serializers.ModelSerializer):
    class Meta:
        model = Announcement
        fields = ['id', 'title', 'content', 'announcement_type', 'priority', 'status',
                  'is_active', 'expires_at', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class ComplaintSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source='user.profile.name', read_only=True, default='')
    reg_number = serializers.CharField(source='user.profile.reg_number', read_only=True, default='')
    room_number = serializers.CharField(source='user.profile.room_number', read_only=True, default='')

    class Meta:
        model = Complaint
        fields = ['id', 'user', 'subject', 'category', 'description', 'status',
                  'name', 'reg_number', 'room_number', 'created_at', 'updated_at']
        read_only_fields = ['user', 'status', 'created_at', 'updated_at']


class ComplaintStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Complaint.STATUSES)


class AdminResponseSerializer(serializers.ModelSerializer):
    admin = serializers.StringRelatedField(read_only=True)

    class Meta:
        model = AdminResponse
        fields = ['id', 'feedback', 'admin', 'response', 'created_at']
        read_only_fields = ['feedback', 'admin', 'created_at']


class FeedbackSerializer(serializers.ModelSerializer):
    user = serializers.StringRelatedField(read_only=True)
    name = serializers.CharField(source='user.profile.name', read_only=True, default='')
    room_number = serializers.CharField(source='user.profile.room_number', read_only=True, default='')
    responses = AdminResponseSerializer(many=True, read_only=True)

    class Meta:
        model = Feedback
        fields = ['id', 'user', 'name', 'room_number', 'meal_type', 'rating', 'comment',
                  'responses', 'created_at']

    def create(self, validated_data):
        request = self.context.get('request')
        validated_data['user'] = request.user
        return super().create(validated_data)


######## USERS AND PROFILES

class DefaultValueHandlingSerializer(serializers.ModelSerializer):
    DEFAULTS = {}

    def validate(self, attrs):
        for field, default in self.DEFAULTS.items():
            if field in attrs and attrs.get(field) in [None, '']:
                attrs[field] = default
        return super().validate(attrs)


class ProfileSerializer(DefaultValueHandlingSerializer):

    DEFAULTS = {
        'phone_number': '',
        'avatar': '',
        'theme': 'light',
    }

    class Meta:
        model = Profile
        fields = ['name', 'reg_number', 'room_number', 'phone_number', 'avatar', 'theme']
        extra_kwargs = {
            'phone_number': {'required': False, 'allow_null': True},
            'avatar': {'required': False, 'allow_null': True},
            'theme': {'required': False},
        }


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'groups']


class UserRegistrationSerializer(serializers.ModelSerializer):
    profile = ProfileSerializer()
    password = serializers.CharField(write_only=True)
    email = serializers.EmailField()

    class Meta:
        model = User
        fields = ['username', 'email', 'password', 'profile']

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("An account with this email already exists.")
        return value

    def create(self, validated_data):
        profile_data = validated_data.pop('profile')
        password = validated_data.pop('password')
        user = User(**validated_data)
        user.set_password(password)
        user.save()
        Profile.objects.create(user=user, **profile_data)
        return user


class UserWithProfileSerializer(serializers.ModelSerializer):
    profile = ProfileSerializer(required=False)

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'is_staff', 'profile']
        read_only_fields = ['id', 'username', 'is_staff']

    def update(self, instance, validated_data):
        profile_data = validated_data.pop('profile', {})
        instance.email = validated_data.get('email', instance.email)
        instance.save()

        profile, _ = Profile.objects.get_or_create(
            user=instance,
            defaults={'name': instance.username, 'reg_number': '', 'room_number': ''},
        )
        for attr, value in profile_data.items():
            setattr(profile, attr, value)
        profile.save()

        return instance
