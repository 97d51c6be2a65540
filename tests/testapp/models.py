"""Entity types used by the test suite."""
from django.db import models


class Event(models.Model):
    class Type(models.TextChoices):
        CONFERENCE = "conference", "Conference"
        WEBINAR = "webinar", "Webinar"

    title = models.CharField(max_length=120)
    type = models.CharField(max_length=32, choices=Type.choices)


class Article(models.Model):
    title = models.CharField(max_length=120)


class Note(models.Model):
    body = models.TextField(blank=True)


class Tag(models.Model):
    name = models.CharField(max_length=64)
