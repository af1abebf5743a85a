import logging

from django.contrib.auth.models import Group, User
from django.shortcuts import get_object_or_404

from rest_framework.response import Response
from rest_framework.decorators import action
from rest_framework.views import APIView
from rest_framework import generics, viewsets, filters, status
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework_simplejwt.views import TokenObtainPairView
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .booking import BookingDesk, SubmitOptions, booking_history, slot_catalog
from .exceptions import MessError, BookingValidationError
from .menu import load_week_menu
from .models import MenuItem, ScheduledMenu, DailyMenu, MealBooking, Feedback, \
    Complaint, Announcement
from .permissions import IsMessAdmin, IsMessAdminOrReadOnly, IsOwnerOrMessAdmin
from .realtime import Subscription, latest_seq
from .serializers import MealBookingSerializer, SelectSlotSerializer, ClearSelectionSerializer, \
    SubmitBookingSerializer, MenuItemSerializer, ScheduledMenuSerializer, DailyMenuSerializer, \
    AnnouncementSerializer, ComplaintSerializer, ComplaintStatusSerializer, FeedbackSerializer, \
    AdminResponseSerializer, UserSerializer, UserRegistrationSerializer, UserWithProfileSerializer
from .session import ADMIN_GROUP, ResidentSession, is_mess_admin
from .stats import monthly_meal_stats
from .utils import friendly_date_string, mess_today, resolve_date_keyword

logger = logging.getLogger(__name__)


def query_date(request, default=None):
    try:
        return resolve_date_keyword(request.query_params.get("date"), default=default)
    except ValueError as exc:
        raise BookingValidationError(str(exc), title="Invalid Date")


###### MEAL BOOKINGS

class MealBookingViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = MealBookingSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['booking_date', 'meal_type', 'meal_preference']

    def get_queryset(self):
        user = self.request.user
        qs = MealBooking.objects.select_related('user').order_by('-booking_date', '-created_at')
        if is_mess_admin(user):
            return qs
        return qs.filter(user=user)

    def get_permissions(self):
        if getattr(self, "action", None) == "slots":
            return [AllowAny()]
        return super().get_permissions()

    def _desk(self, request, booking_date):
        session = ResidentSession.from_request(request)
        desk = BookingDesk.restore(session, booking_date)
        if not desk.loaded and booking_date is not None:
            desk.load_day_state()
        return desk

    # ------------------------
    # History
    # ------------------------
    def list(self, request, *args, **kwargs):
        if is_mess_admin(request.user):
            bookings = self.filter_queryset(self.get_queryset())
        else:
            bookings = booking_history(request.user)
        data = self.get_serializer(bookings, many=True).data
        return Response({
            "results": data,
            "message": None if data else "no bookings yet",
        })

    # ------------------------
    # Public: slot catalog
    # ------------------------
    @action(detail=False, methods=["get"], url_path="slots")
    def slots(self, request):
        return Response({"slots": slot_catalog()})

    # ------------------------
    # Day state and selections
    # ------------------------
    @action(detail=False, methods=["get"], url_path="day-state")
    def day_state(self, request):
        booking_date = query_date(request, default=mess_today())
        session = ResidentSession.from_request(request)
        desk = BookingDesk.restore(session, booking_date)
        desk.load_day_state()
        desk.save()
        return Response(desk.snapshot())

    @action(detail=False, methods=["post", "delete"], url_path="select")
    def select(self, request):
        if request.method == "DELETE":
            serializer = ClearSelectionSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            desk = self._desk(request, serializer.validated_data["date"])
            desk.clear_selection(serializer.validated_data.get("meal_type"))
            desk.save()
            return Response(desk.snapshot())

        serializer = SelectSlotSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        desk = self._desk(request, serializer.validated_data["date"])
        desk.select_slot(serializer.validated_data["meal_type"], serializer.validated_data["slot_id"])
        desk.save()
        return Response(desk.snapshot())

    # ------------------------
    # Submit selected slots
    # ------------------------
    @action(detail=False, methods=["post"], url_path="submit")
    def submit(self, request):
        serializer = SubmitBookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        desk = self._desk(request, data.get("date"))
        options = SubmitOptions(
            meal_preference=data.get("meal_preference") or "veg",
            note=data.get("note") or None,
        )
        created = desk.submit(options)
        desk.save()

        return Response({
            "title": "Booking Successful",
            "detail": f"Your meal time slots for {friendly_date_string(desk.booking_date)} "
                      "have been booked successfully.",
            "bookings": MealBookingSerializer(created, many=True).data,
            "day_state": desk.snapshot(),
            "history": MealBookingSerializer(desk.history, many=True).data,
        }, status=status.HTTP_201_CREATED)

    # ------------------------
    # Monthly statistics
    # ------------------------
    @action(detail=False, methods=["get"], url_path="stats")
    def stats(self, request):
        today = query_date(request, default=mess_today())
        return Response(monthly_meal_stats(request.user, today))


###### MENUS

class WeekMenuView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        include_unpublished = is_mess_admin(request.user) and request.query_params.get("drafts") == "1"
        return Response(load_week_menu(mess_today(), include_unpublished=include_unpublished))


class TodayMenuView(APIView):
    permission_classes = [IsMessAdminOrReadOnly]

    def get(self, request):
        menu = DailyMenu.objects.filter(date=mess_today()).first()
        if menu is None:
            return Response({"title": "Not Found", "detail": "No menu has been set for today."},
                            status=status.HTTP_404_NOT_FOUND)
        return Response(DailyMenuSerializer(menu).data)

    def put(self, request):
        menu = DailyMenu.objects.filter(date=mess_today()).first()
        serializer = DailyMenuSerializer(menu, data=request.data, partial=menu is not None)
        serializer.is_valid(raise_exception=True)
        saved = serializer.save(date=mess_today())
        logger.info("Daily menu for %s saved by %s", saved.date, request.user.username)
        return Response(serializer.data, status=status.HTTP_200_OK if menu else status.HTTP_201_CREATED)


class MenuItemViewSet(viewsets.ModelViewSet):
    queryset = MenuItem.objects.all()
    serializer_class = MenuItemSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['category', 'vegetarian']
    search_fields = ['name', 'description', 'category']
    ordering_fields = ['name', 'category']
    permission_classes = [IsMessAdminOrReadOnly]


class ScheduledMenuViewSet(viewsets.ModelViewSet):
    serializer_class = ScheduledMenuSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['date', 'meal_type', 'published']
    ordering_fields = ['date', 'meal_type']
    permission_classes = [IsMessAdminOrReadOnly]

    def get_queryset(self):
        qs = ScheduledMenu.objects.all()
        if is_mess_admin(self.request.user):
            return qs
        return qs.filter(published=True)

    @action(detail=True, methods=["post"], url_path="publish")
    def publish(self, request, pk=None):
        menu = self.get_object()
        menu.published = True
        menu.save(update_fields=["published", "updated_at"])
        return Response(self.get_serializer(menu).data)


###### ANNOUNCEMENTS

class AnnouncementViewSet(viewsets.ModelViewSet):
    serializer_class = AnnouncementSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'announcement_type', 'priority', 'is_active']
    search_fields = ['title', 'content']
    ordering_fields = ['created_at', 'priority']
    permission_classes = [IsMessAdminOrReadOnly]

    def get_queryset(self):
        qs = Announcement.objects.all().order_by('-created_at')
        if is_mess_admin(self.request.user):
            return qs
        return qs.filter(is_active=True)


###### COMPLAINTS

class ComplaintViewSet(viewsets.ModelViewSet):
    serializer_class = ComplaintSerializer
    permission_classes = [IsAuthenticated, IsOwnerOrMessAdmin]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['status', 'category']
    search_fields = ['subject', 'description', 'user__profile__name', 'user__profile__reg_number']
    http_method_names = ['get', 'post', 'delete', 'head', 'options']

    def get_queryset(self):
        qs = Complaint.objects.select_related('user', 'user__profile').order_by('-created_at')
        if is_mess_admin(self.request.user):
            return qs
        return qs.filter(user=self.request.user)

    def create(self, request, *args, **kwargs):
        if not all(str(request.data.get(field) or "").strip() for field in ("subject", "category", "description")):
            raise MessError("Please fill out all fields before submitting your complaint.",
                            title="Incomplete Form")
        return super().create(request, *args, **kwargs)

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)

    @action(detail=True, methods=["post"], url_path="status", permission_classes=[IsMessAdmin])
    def set_status(self, request, pk=None):
        complaint = self.get_object()
        serializer = ComplaintStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        complaint.status = serializer.validated_data["status"]
        complaint.save(update_fields=["status", "updated_at"])
        return Response(self.get_serializer(complaint).data)


###### FEEDBACK

class FeedbackViewSet(viewsets.ModelViewSet):
    serializer_class = FeedbackSerializer
    permission_classes = [IsAuthenticated, IsOwnerOrMessAdmin]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['meal_type', 'rating']
    search_fields = ['comment', 'user__profile__name', 'user__profile__room_number']
    http_method_names = ['get', 'post', 'delete', 'head', 'options']

    def get_queryset(self):
        qs = Feedback.objects.select_related('user').prefetch_related('responses').order_by('-created_at')
        if is_mess_admin(self.request.user):
            return qs
        return qs.filter(user=self.request.user)

    def create(self, request, *args, **kwargs):
        if not request.data.get("rating"):
            raise MessError("Please select a rating before submitting your feedback.",
                            title="Rating Required")
        return super().create(request, *args, **kwargs)

    @action(detail=True, methods=["post"], url_path="respond", permission_classes=[IsMessAdmin])
    def respond(self, request, pk=None):
        feedback = self.get_object()
        serializer = AdminResponseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save(feedback=feedback, admin=request.user)
        # re-fetch, the prefetched responses are stale now
        return Response(self.get_serializer(self.get_object()).data, status=status.HTTP_201_CREATED)


###### CHANGE FEED

def is_today_menu(row):
    return row.get("date") == mess_today().isoformat()


CHANGE_FEEDS = {
    "announcements": lambda row: bool(row.get("is_active")),
    "daily_menus": is_today_menu,
}


class ChangeFeedView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, table):
        if table not in CHANGE_FEEDS:
            return Response({"title": "Not Found", "detail": f"No change feed for '{table}'."},
                            status=status.HTTP_404_NOT_FOUND)
        try:
            since = int(request.query_params.get("since", latest_seq(table)))
        except ValueError:
            raise MessError("'since' must be an integer cursor.", title="Invalid Cursor")

        subscription = Subscription(table, predicate=CHANGE_FEEDS[table], cursor=since)
        events = subscription.drain()
        return Response({
            "table": table,
            "cursor": subscription.cursor,
            "resync": subscription.resync,
            "events": [event.model_dump(mode="json") for event in events],
        })


###### USER REGISTRATION
# USER PROFILE RELATED

class UserRegistrationView(generics.CreateAPIView):
    serializer_class = UserRegistrationSerializer
    permission_classes = [AllowAny]


class UserProfileView(generics.RetrieveUpdateAPIView):
    serializer_class = UserWithProfileSerializer
    permission_classes = [IsAuthenticated]

    def get_object(self):
        return self.request.user


class ThemeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({"theme": ResidentSession.from_request(request).theme})

    def post(self, request):
        session = ResidentSession.from_request(request)
        return Response({"theme": session.toggle_theme()})


class AdminUserViewSet(viewsets.ModelViewSet):
    queryset = User.objects.select_related('profile').order_by('id')
    serializer_class = UserWithProfileSerializer
    permission_classes = [IsMessAdmin]
    filter_backends = [filters.SearchFilter]
    search_fields = ['username', 'email', 'profile__name', 'profile__reg_number', 'profile__room_number']
    # accounts are created through registration, which also builds the profile
    http_method_names = ['get', 'put', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        qs = super().get_queryset()
        block = self.request.query_params.get("block")
        if block and block != "all":
            qs = qs.filter(profile__room_number__istartswith=block[0])
        return qs


#####################
# MESS ADMIN GROUP MEMBERSHIP

class GroupViewSet(viewsets.ViewSet):
    permission_classes = [IsMessAdmin]

    def list(self, request):
        users = User.objects.all().filter(groups__name=ADMIN_GROUP)
        items = UserSerializer(users, many=True)
        return Response(items.data)

    def create(self, request):
        user = get_object_or_404(User, username=request.data.get('username'))
        admins, _ = Group.objects.get_or_create(name=ADMIN_GROUP)
        admins.user_set.add(user)
        return Response({"message": "user added to the mess admin group"}, 200)

    def destroy(self, request):
        user = get_object_or_404(User, username=request.data.get('username'))
        admins, _ = Group.objects.get_or_create(name=ADMIN_GROUP)
        admins.user_set.remove(user)
        return Response({"message": "user removed from the mess admin group"}, 200)


##################################
# JWT LOGIN THAT ALSO RETURNS THE PROFILE BLOB
################################

class MessTokenObtainPairSerializer(TokenObtainPairSerializer):
    def validate(self, attrs):
        data = super().validate(attrs)
        # clients keep this copy for display while offline
        data["user"] = UserWithProfileSerializer(self.user).data
        return data


class MessTokenObtainPairView(TokenObtainPairView):
    serializer_class = MessTokenObtainPairSerializer
