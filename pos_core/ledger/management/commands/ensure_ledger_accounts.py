# pos_core/ledger/management/commands/ensure_ledger_accounts.py

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from pos_core.ledger.services import LedgerBootstrapService
from pos_core.workspaces.models import Workspace
from pos_core.workspaces.selectors import get_workspace_by_code_or_none


class Command(BaseCommand):
    help = "Ensure the required chart of accounts exists for workspaces (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--workspace", dest="workspace_code", help="Only this workspace code.")

    def handle(self, *args, **options):
        code = options.get("workspace_code")
        if code:
            ws = get_workspace_by_code_or_none(code=code)
            if ws is None:
                raise CommandError(f"Workspace {code!r} not found.")
            workspaces = [ws]
        else:
            workspaces = Workspace.objects.all().order_by("created_at")

        count = 0
        created = 0
        for ws in workspaces:
            with transaction.atomic():
                result = LedgerBootstrapService.initialize_for_workspace(workspace_id=ws.id)
            count += 1
            created += len(result.created)
            if result.created:
                self.stdout.write(f"{ws.code}: created {', '.join(result.created)}")

        self.stdout.write(
            self.style.SUCCESS(f"Ledger accounts ensured for {count} workspace(s). Newly created: {created}")
        )
