"""Render report notifications for Slack and email.

Both renderers are pure functions of the notification payload, so the same
payload always produces identical output.
"""

from html import escape

from shift_report.domain.notifications import (
    ChecklistDetail,
    EmailMessage,
    ReportNotification,
    SlackMessage,
)

PRODUCT_NAME = "Saladoop"
CHECKED_GLYPH = "✅"
UNCHECKED_GLYPH = "⬜"


def checklist_header(details: list[ChecklistDetail]) -> str:
    """Return the checklist title with a checked/total count."""
    checked = sum(1 for detail in details if detail.checked)
    return f"체크리스트 ({checked}/{len(details)})"


def render_slack_blocks(
    notification: ReportNotification, embed_images: bool = True
) -> SlackMessage:
    """Render a Block Kit message for the report."""
    blocks: list[dict[str, object]] = [
        {
            "type": "header",
            "text": {
                "type": "plain_text",
                "text": (
                    f"📝 {PRODUCT_NAME} 일일 업무 보고 - "
                    f"{notification.shift_stage or '시간 미정'}"
                ),
                "emoji": True,
            },
        },
        {
            "type": "section",
            "fields": [
                {
                    "type": "mrkdwn",
                    "text": f"*작성자:*\n{notification.reporter_name or '알 수 없음'}",
                },
                {
                    "type": "mrkdwn",
                    "text": (
                        f"*작성 시간:*\n{notification.date} {notification.timestamp}"
                    ).rstrip(),
                },
            ],
        },
        _mrkdwn_section(
            f"*📢 사장님 한 줄 요약:*\n> {notification.summary_for_boss or '내용 없음'}"
        ),
        _mrkdwn_section(
            f"*✅ 특이사항 및 업무 상세:*\n{notification.issues or '특이사항 없음'}"
        ),
    ]

    if notification.checklist_details:
        lines = [
            f"{CHECKED_GLYPH if detail.checked else UNCHECKED_GLYPH} {detail.label}"
            for detail in notification.checklist_details
        ]
        blocks.append(
            _mrkdwn_section(
                f"*📋 {checklist_header(notification.checklist_details)}*\n"
                + "\n".join(lines)
            )
        )

    photos = notification.photos
    if photos:
        title = f"*📷 현장 사진 ({len(photos)}장)*"
        if not embed_images:
            blocks.append(
                _mrkdwn_section(f"{title}\n사진은 보고서 기록에서 확인할 수 있습니다.")
            )
        else:
            blocks.append(_mrkdwn_section(title))
            for photo in photos:
                blocks.append(
                    {
                        "type": "image",
                        "image_url": photo.url,
                        "alt_text": photo.label,
                        "title": {
                            "type": "plain_text",
                            "text": photo.label,
                            "emoji": True,
                        },
                    }
                )

    return SlackMessage(blocks=blocks)


def _mrkdwn_section(text: str) -> dict[str, object]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def render_email(notification: ReportNotification) -> EmailMessage:
    """Render the HTML email for the report."""
    subject = f"[{notification.reporter_name or '신규'}] {notification.date} 보고서 도착"
    stage = escape(notification.shift_stage or "확인 불가")
    date = escape(notification.date)
    summary = escape(notification.summary_for_boss or "한 줄 요약이 없습니다.")
    reporter = escape(notification.reporter_name or "알 수 없음")
    timestamp = escape(notification.timestamp)
    issues = escape(notification.issues or "상세 내용 없음")

    html = _EMAIL_TEMPLATE.format(
        product=escape(PRODUCT_NAME),
        date=date,
        stage=stage,
        summary=summary,
        reporter=reporter,
        timestamp=timestamp,
        issues=issues,
        checklist=_email_checklist(notification.checklist_details),
        photos=_email_photos(notification),
    )
    return EmailMessage(subject=subject, html=html)


def _email_checklist(details: list[ChecklistDetail] | None) -> str:
    if not details:
        return ""
    rows = "".join(
        _EMAIL_CHECKLIST_ROW.format(
            glyph=CHECKED_GLYPH if detail.checked else UNCHECKED_GLYPH,
            label=escape(detail.label),
        )
        for detail in details
    )
    return _EMAIL_CHECKLIST.format(title=escape(checklist_header(details)), rows=rows)


def _email_photos(notification: ReportNotification) -> str:
    if not notification.photos:
        return ""
    cells = "".join(
        _EMAIL_PHOTO_CELL.format(
            url=escape(photo.url, quote=True), label=escape(photo.label, quote=True)
        )
        for photo in notification.photos
    )
    return _EMAIL_PHOTOS.format(cells=cells)


_EMAIL_CHECKLIST_ROW = (
    '<p style="margin: 0 0 6px; font-size: 14px; color: #475569;">'
    "{glyph} {label}</p>"
)

_EMAIL_CHECKLIST = """
<div style="margin-bottom: 30px; padding: 25px; border: 1.5px solid #f1f5f9; border-radius: 15px;">
  <p style="margin: 0 0 15px; font-size: 11px; font-weight: 900; color: #64748b; letter-spacing: 1px;">{title}</p>
  {rows}
</div>"""

_EMAIL_PHOTO_CELL = """
<div style="display: inline-block; width: 48%; margin: 1%; vertical-align: top;">
  <img src="{url}" width="100%" style="display: block; width: 100%; border-radius: 12px; border: 1px solid #f1f5f9;" alt="{label}" />
</div>"""

_EMAIL_PHOTOS = """
<p style="margin: 0 0 15px; font-size: 11px; font-weight: 900; color: #64748b; letter-spacing: 1px;">현장 사진</p>
<table border="0" cellpadding="0" cellspacing="0" width="100%">
  <tr>
    <td align="center"><div style="font-size: 0;">{cells}</div></td>
  </tr>
</table>"""

_EMAIL_TEMPLATE = """<!DOCTYPE html>
<html lang="ko">
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{product} Daily Report</title>
  </head>
  <body style="margin: 0; padding: 0; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif; background-color: #f4f7f9; color: #334155;">
    <table border="0" cellpadding="0" cellspacing="0" width="100%" style="table-layout: fixed;">
      <tr>
        <td align="center" style="padding: 40px 10px;">
          <table border="0" cellpadding="0" cellspacing="0" width="100%" style="max-width: 600px; background-color: #ffffff; border-radius: 20px; overflow: hidden; border: 1px solid #e2e8f0;">
            <tr>
              <td align="center" style="padding: 40px; background-color: #4f46e5;">
                <h1 style="margin: 0; font-size: 24px; font-weight: 900; color: #ffffff; text-transform: uppercase;">{product} Report</h1>
                <p style="margin: 5px 0 0; font-size: 13px; color: #e0e7ff;">{date} | {stage}</p>
              </td>
            </tr>
            <tr>
              <td style="padding: 40px;">
                <table border="0" cellpadding="0" cellspacing="0" width="100%" style="margin-bottom: 30px; background-color: #f8fafc; border-radius: 15px; border-left: 5px solid #4f46e5;">
                  <tr>
                    <td style="padding: 25px;">
                      <p style="margin: 0 0 10px; font-size: 11px; font-weight: 900; color: #64748b;">사장님 한 줄 요약</p>
                      <p style="margin: 0; font-size: 18px; font-weight: 800; color: #1e293b;">&quot;{summary}&quot;</p>
                    </td>
                  </tr>
                </table>
                <table border="0" cellpadding="0" cellspacing="0" width="100%" style="margin-bottom: 30px;">
                  <tr>
                    <td width="50%" style="padding-bottom: 20px;">
                      <p style="margin: 0 0 5px; font-size: 11px; font-weight: 900; color: #94a3b8;">작성자</p>
                      <p style="margin: 0; font-size: 14px; font-weight: 700;">{reporter}</p>
                    </td>
                    <td width="50%" style="padding-bottom: 20px;">
                      <p style="margin: 0 0 5px; font-size: 11px; font-weight: 900; color: #94a3b8;">작성 시간</p>
                      <p style="margin: 0; font-size: 14px; font-weight: 700;">{timestamp}</p>
                    </td>
                  </tr>
                </table>
                <div style="margin-bottom: 30px; padding: 25px; border: 1.5px solid #f1f5f9; border-radius: 15px;">
                  <p style="margin: 0 0 15px; font-size: 11px; font-weight: 900; color: #64748b;">상세 업무 및 특이사항</p>
                  <p style="margin: 0; font-size: 14px; color: #475569; line-height: 1.7; white-space: pre-wrap;">{issues}</p>
                </div>
                {checklist}
                {photos}
              </td>
            </tr>
            <tr>
              <td align="center" style="padding: 30px; background-color: #f8fafc; border-top: 1px solid #f1f5f9;">
                <p style="margin: 0; font-size: 12px; color: #94a3b8;">본 보고서는 {product} 운영 도구에 의해 전송되었습니다.</p>
              </td>
            </tr>
          </table>
        </td>
      </tr>
    </table>
  </body>
</html>
"""
