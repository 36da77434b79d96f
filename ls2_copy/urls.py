"""
URLs for the LS2 course copy service.
"""
from django.urls import include, path

urlpatterns = [
    path('api/ls2_copy/', include('ls2_copy.djangoapps.course_copy.urls')),
]
