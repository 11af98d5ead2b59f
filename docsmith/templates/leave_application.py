from docsmith.templates.base import TemplateModule

FIELDS = [
    "applicantName",
    "applicantDesignation",
    "department",
    "applicationDate",
    "managerName",
    "companyName",
    "leaveType",
    "startDate",
    "endDate",
    "leaveReason",
    "handoverNote",
    "contactDuringLeave",
    "signature",
]

_BODY = """<body>
<div class="page">
  <p class="date">{{applicationDate}}</p>
  <p>To,<br><strong>{{managerName}}</strong><br>{{companyName}}</p>
  <p class="subject">Subject: Application for {{leaveType}} leave</p>
  <p>Dear {{managerName}},</p>
  <p>I, {{applicantName}} ({{applicantDesignation}}, {{department}}), request {{leaveType}} leave
     from {{startDate}} to {{endDate}}.</p>
  <p>{{leaveReason}}</p>
  <p>{{handoverNote}}</p>
  <p>I can be reached at {{contactDuringLeave}} while I am away.</p>
  <p>Thank you for considering my request.</p>
  <img class="signature-image" src="{{signature}}" alt="Signature" />
  <p><strong>{{applicantName}}</strong></p>
</div>
</body>
</html>
"""


def _theme(style: str) -> str:
    return (
        "<!DOCTYPE html>\n<html lang=\"en\">\n<head>\n<meta charset=\"UTF-8\">\n"
        "<title>Leave Application</title>\n<style>\n"
        "@page { size: A4; margin: 0; }\n"
        ".page { box-sizing: border-box; width: 210mm; min-height: 297mm; padding: 25mm; }\n"
        ".signature-image { max-height: 60px; }\n"
        f"{style}\n</style>\n</head>\n{_BODY}"
    )


module = TemplateModule(
    slug="leave-application",
    title="Leave Application",
    fields=FIELDS,
    themes={
        "classic": _theme("body { font-family: Georgia, serif; font-size: 12pt; line-height: 1.6; }"),
        "modern": _theme(
            "body { font-family: Arial, sans-serif; font-size: 11pt; color: #333; }\n"
            ".subject { background: #2c3e50; color: #fff; padding: 0.5em 1em; }"
        ),
        "minimal": _theme(
            "body { font-family: Arial, sans-serif; font-size: 11pt; }\n"
            ".subject { border-bottom: 1px solid #ccc; padding-bottom: 0.5em; }"
        ),
        "traditional": _theme(
            "body { font-family: 'Times New Roman', serif; font-size: 12pt; line-height: 1.8; }\n"
            ".page { border: 6px double #444; }\n.date { text-align: right; }"
        ),
    },
)
