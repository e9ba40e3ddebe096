import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Activity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('category', models.CharField(choices=[('General', 'General'), ('Monitoring', 'Monitoring'), ('Maintenance', 'Maintenance'), ('Security', 'Security'), ('Performance', 'Performance'), ('Troubleshooting', 'Troubleshooting')], db_index=True, default='General', max_length=20)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('done', 'Done')], db_index=True, default='pending', help_text='Mirror of the latest update status', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='created_activities', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'activity',
                'verbose_name_plural': 'activities',
                'db_table': 'activities',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['category', 'status'], name='activities_categor_5a1e0c_idx')],
            },
        ),
        migrations.CreateModel(
            name='ActivityUpdate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('done', 'Done')], max_length=10)),
                ('remarks', models.TextField(blank=True, null=True)),
                ('updated_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, editable=False)),
                ('activity', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='updates', to='activities.activity')),
                ('updated_by', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='activity_updates', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'activity update',
                'verbose_name_plural': 'activity updates',
                'db_table': 'activity_updates',
                'ordering': ['-updated_at', '-id'],
                'indexes': [
                    models.Index(fields=['activity', '-updated_at'], name='activity_up_activit_3c9b2e_idx'),
                    models.Index(fields=['updated_by', '-updated_at'], name='activity_up_updated_8d41f7_idx'),
                ],
            },
        ),
    ]
