from fundintake.drafts.controller import DraftPersistController
from fundintake.forms.model import FormModel
from fundintake.forms.schema import InvestmentForm
from fundintake.logging.logger import Log


def submit_investment(form: FormModel, drafts: DraftPersistController) -> InvestmentForm:
    """Validate the wizard and, on success, drop its draft.

    Raises:
        pydantic.ValidationError: if the form is incomplete or inconsistent.
            The draft is kept so the user can fix the form and retry.
    """
    submission = InvestmentForm.model_validate(form.get_values())
    drafts.clear()
    form.mark_clean()
    Log.info("Investment submitted", slug=submission.slug)
    return submission
