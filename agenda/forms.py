"""Forms validating agenda API payloads."""

from django import forms

from .models import Attendee


class AttendeeForm(forms.ModelForm):
    """Registration data for a new attendee."""

    class Meta:
        """Form metadata."""

        model = Attendee
        fields = ("first_name", "last_name", "user_name", "email_address")

    def clean_user_name(self) -> str:
        """Store user names in lower case, as login emails are."""
        return self.cleaned_data["user_name"].strip().lower()
