from django.urls import path
from rest_framework.routers import DefaultRouter
from .views import WeekMenuView, TodayMenuView, ChangeFeedView, UserRegistrationView, UserProfileView, \
    ThemeView, GroupViewSet, MealBookingViewSet, MenuItemViewSet, ScheduledMenuViewSet, AnnouncementViewSet, \
    ComplaintViewSet, FeedbackViewSet, AdminUserViewSet


app_name = 'mess'


urlpatterns = [
    path('menu/week', WeekMenuView.as_view(), name='week-menu'),
    path('menu/today', TodayMenuView.as_view(), name='today-menu'),
    path('changes/<str:table>', ChangeFeedView.as_view(), name='change-feed'),
    path('groups/mess-admin/users', GroupViewSet.as_view({'get': 'list', 'post': 'create', 'delete': 'destroy'}),
         name='mess-admin-group'),
    path('register/', UserRegistrationView.as_view(), name='register'),
    path('me/', UserProfileView.as_view(), name='user-profile'),
    path('me/theme', ThemeView.as_view(), name='user-theme'),
]


router = DefaultRouter()
router.register(r'meal-bookings', MealBookingViewSet, basename='meal-booking')
router.register(r'menu-items', MenuItemViewSet, basename='menu-item')
router.register(r'scheduled-menus', ScheduledMenuViewSet, basename='scheduled-menu')
router.register(r'announcements', AnnouncementViewSet, basename='announcement')
router.register(r'complaints', ComplaintViewSet, basename='complaint')
router.register(r'feedbacks', FeedbackViewSet, basename='feedback')
router.register(r'admin/users', AdminUserViewSet, basename='admin-users')


urlpatterns += router.urls
