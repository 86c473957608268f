# GUI Components
from .nav_bar import create_nav_bar
from .notice_bar import NoticeBar
from .login_form import LoginPanel
from .register_form import create_register_form
from .password_forms import create_change_password_form, create_reset_request_form
from .referral_form import create_referral_form
from .candidate_list import CandidateList
from .stats_panel import create_stats_panel
from .analytics_panel import AnalyticsPanel

__all__ = [
    "create_nav_bar",
    "NoticeBar",
    "LoginPanel",
    "create_register_form",
    "create_change_password_form",
    "create_reset_request_form",
    "create_referral_form",
    "CandidateList",
    "create_stats_panel",
    "AnalyticsPanel",
]
