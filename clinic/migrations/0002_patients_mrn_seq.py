from django.db import migrations


def create_sequence(apps, schema_editor):
    if schema_editor.connection.vendor != 'postgresql':
        return
    schema_editor.execute('CREATE SEQUENCE IF NOT EXISTS patients_mrn_seq START 1')


def drop_sequence(apps, schema_editor):
    if schema_editor.connection.vendor != 'postgresql':
        return
    schema_editor.execute('DROP SEQUENCE IF EXISTS patients_mrn_seq')


class Migration(migrations.Migration):

    dependencies = [
        ('clinic', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(create_sequence, drop_sequence),
    ]
