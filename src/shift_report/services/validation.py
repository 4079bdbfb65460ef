"""Report form validation."""

from shift_report.domain.errors import ValidationError, ValidationReason
from shift_report.domain.reports import PhotoSlot, ReportDraft, ReportForm
from shift_report.domain.stages import stage_config


def validate_form(form: ReportForm) -> ReportDraft:
    """Validate form state for its shift stage and return a draft.

    Only the one-line summary is required. Checklist keys must belong to the
    stage and filled photo slots may not exceed the stage maximum.
    """
    summary = form.summary_for_boss.strip()
    if not summary:
        raise ValidationError(
            ValidationReason.MISSING_SUMMARY, "사장님 요약은 필수입니다."
        )

    config = stage_config(form.shift_stage)
    unknown = sorted(set(form.checklist) - config.checklist_ids)
    if unknown:
        raise ValidationError(
            ValidationReason.UNKNOWN_CHECKLIST_ITEM,
            f"Unknown checklist items for {form.shift_stage.value}: "
            f"{', '.join(unknown)}",
        )

    slots = [
        PhotoSlot(index=index, data_url=photo)
        for index, photo in enumerate(form.photos)
        if photo
    ]
    if len(slots) > config.max_photos:
        raise ValidationError(
            ValidationReason.TOO_MANY_PHOTOS,
            f"At most {config.max_photos} photos allowed for "
            f"{form.shift_stage.value}",
        )

    return ReportDraft(
        shift_stage=form.shift_stage,
        busy_level=form.busy_level,
        summary_for_boss=summary,
        issues=form.issues,
        checklist=dict(form.checklist),
        photo_slots=slots,
    )
