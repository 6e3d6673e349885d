from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('participants', '0001_initial'),
        ('programs', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Registration',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('Approved', 'Approved'), ('Pending', 'Pending'), ('Rejected', 'Rejected'), ('Waitlisted', 'Waitlisted')], default='Pending', max_length=20)),
                ('registration_date', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('participant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='registrations', to='participants.participant')),
                ('program', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='registrations', to='programs.program')),
            ],
            options={
                'db_table': 'registrations',
                'ordering': ['-registration_date'],
                'indexes': [
                    models.Index(fields=['status', 'registration_date'], name='registrations_status_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('program', 'participant'), name='unique_registration_per_program'),
                ],
            },
        ),
    ]
