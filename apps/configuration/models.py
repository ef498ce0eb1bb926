from django.db import models
import uuid


class Setting(models.Model):
    """
    Named store setting kept as a string.

    Values are interpreted by type at load time (see ``store_config``),
    never by the admin form that writes them.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=100, unique=True)
    value = models.CharField(max_length=255)
    description = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = 'settings'
        ordering = ['key']

    def __str__(self):
        return f"{self.key}={self.value}"
