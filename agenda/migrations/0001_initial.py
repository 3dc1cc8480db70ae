import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Track',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Name of the track', max_length=200)),
            ],
            options={
                'verbose_name': 'Track',
                'verbose_name_plural': 'Tracks',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Speaker',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Full name of the speaker', max_length=200)),
                ('bio', models.TextField(blank=True, help_text='Biography of the speaker', max_length=4000)),
                ('website', models.URLField(blank=True, default='', help_text='Personal website of the speaker', max_length=1000)),
            ],
            options={
                'verbose_name': 'Speaker',
                'verbose_name_plural': 'Speakers',
            },
        ),
        migrations.CreateModel(
            name='Session',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(help_text='Title of the session', max_length=200)),
                ('abstract', models.TextField(blank=True, help_text='Session abstract', max_length=4000)),
                ('start_time', models.DateTimeField(blank=True, help_text='When the session starts', null=True)),
                ('end_time', models.DateTimeField(blank=True, help_text='When the session ends', null=True)),
                ('track', models.ForeignKey(blank=True, help_text='Track the session belongs to', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='sessions', to='agenda.track')),
            ],
            options={
                'verbose_name': 'Session',
                'verbose_name_plural': 'Sessions',
                'ordering': ['start_time', 'title'],
                'indexes': [models.Index(fields=['start_time'], name='agenda_session_start_idx')],
            },
        ),
        migrations.CreateModel(
            name='SessionSpeaker',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('session', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='session_speakers', to='agenda.session')),
                ('speaker', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='session_speakers', to='agenda.speaker')),
            ],
            options={
                'constraints': [models.UniqueConstraint(fields=('session', 'speaker'), name='unique_session_speaker')],
            },
        ),
        migrations.AddField(
            model_name='session',
            name='speakers',
            field=models.ManyToManyField(help_text='Speakers presenting this session', related_name='sessions', through='agenda.SessionSpeaker', to='agenda.speaker'),
        ),
        migrations.CreateModel(
            name='Attendee',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('first_name', models.CharField(max_length=200)),
                ('last_name', models.CharField(max_length=200)),
                ('user_name', models.CharField(help_text='Login name of the attendee (their email address)', max_length=200, unique=True)),
                ('email_address', models.EmailField(blank=True, default='', max_length=256)),
            ],
            options={
                'verbose_name': 'Attendee',
                'verbose_name_plural': 'Attendees',
                'ordering': ['user_name'],
            },
        ),
        migrations.CreateModel(
            name='SessionAttendee',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('attendee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='session_attendees', to='agenda.attendee')),
                ('session', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='session_attendees', to='agenda.session')),
            ],
            options={
                'constraints': [models.UniqueConstraint(fields=('session', 'attendee'), name='unique_session_attendee')],
            },
        ),
        migrations.AddField(
            model_name='attendee',
            name='sessions',
            field=models.ManyToManyField(blank=True, related_name='attendees', through='agenda.SessionAttendee', to='agenda.session'),
        ),
    ]
