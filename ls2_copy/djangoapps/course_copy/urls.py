"""
URLs for the course copy web service
"""
from django.urls import path

from ls2_copy.djangoapps.course_copy.views import ExternalFunctionView, ServiceInfoView

app_name = 'course_copy'

urlpatterns = [
    path('v1/functions/<str:function_name>/', ExternalFunctionView.as_view(), name='function'),
    path('v1/site_info/', ServiceInfoView.as_view(), name='site-info'),
]
