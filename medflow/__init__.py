"""MedFlow project package: settings, URL configuration and server entry points."""
