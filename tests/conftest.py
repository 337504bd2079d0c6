"""Shared fixtures for bloatbuster tests."""

import pytest

from bloatbuster.database import build_database
from bloatbuster.log import logger


@pytest.fixture
def db_cfg():
    return {
        "recognisedPackages": ["com.android.chrome", "com.android.systemui", "com.overlap.app"],
        "bloatwarePackages": [
            "com.android.egg",
            "com.overlap.app",
            "com.mediatek.engineermode",
            "com.samsung.android.game.gos",
            {"appID": "com.miui.analytics", "appName": "MIUI Analytics", "description": "Sends usage data."},
            {"appID": "com.facebook.appmanager"},
        ],
        "metadata": {
            "com.android.systemui": {
                "appName": "System UI",
                "description": "Status bar and navigation.",
                "safetyRating": "risky",
                "removalImpact": "Device becomes unusable.",
                "category": "Android System",
            },
            "com.miui.analytics": {
                "appName": "Analytics (meta)",
                "safetyRating": "safe",
                "category": "Telemetry",
            },
            "com.unknown.documented": {
                "description": "Known to the metadata table only.",
                "safetyRating": "caution",
            },
        },
    }


@pytest.fixture
def database(db_cfg):
    return build_database(db_cfg)


@pytest.fixture
def scenario_text():
    return "package:com.android.egg\npackage:com.unknown.test123\npackage:com.android.chrome"


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    # CLI tests install handlers bound to captured streams
    logger.handlers = []
    logger.propagate = True
