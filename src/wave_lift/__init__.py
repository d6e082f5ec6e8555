"""wave-lift: 5-week wave strength tracker with cardio adherence."""

__version__ = "0.1.0"
