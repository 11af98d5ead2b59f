"""
Resignation letter.

Four themes share the same fourteen placeholders. Styles are inline and use
system fonts only, so the documents render without network access.
"""
from docsmith.templates.base import TemplateModule

FIELDS = [
    "authorName",
    "authorEmail",
    "authorPhone",
    "resignationDate",
    "recipientName",
    "recipientDesignation",
    "companyName",
    "resignationStatement",
    "lastWorkingDay",
    "resignationReason",
    "gratitudeNote",
    "transitionOffer",
    "closingStatement",
    "signature",
]

_HEAD = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>Resignation Letter</title>
<style>
@page {{ size: A4; margin: 0; }}
body {{ margin: 0; color: #1a1a1a; }}
.page {{ box-sizing: border-box; width: 210mm; min-height: 297mm; }}
.signature-image {{ max-height: 60px; }}
{style}
</style>
</head>
"""

CLASSIC = _HEAD.format(style="""
body { font-family: Georgia, 'Times New Roman', serif; font-size: 12pt; line-height: 1.6; }
.page { padding: 25mm; }
.sender { text-align: right; }
.sender .name { font-weight: bold; font-size: 14pt; }
.recipient { margin: 2.5em 0 2em; }
.body p { text-align: justify; margin-bottom: 1.2em; }
""") + """<body>
<div class="page">
  <div class="sender">
    <p class="name">{{authorName}}</p>
    <p>{{authorEmail}}</p>
    <p>{{authorPhone}}</p>
  </div>
  <p class="date">{{resignationDate}}</p>
  <div class="recipient">
    <p><strong>{{recipientName}}</strong></p>
    <p>{{recipientDesignation}}</p>
    <p>{{companyName}}</p>
  </div>
  <p>Dear {{recipientName}},</p>
  <div class="body">
    <p>{{resignationStatement}} My last day of employment will be {{lastWorkingDay}}.</p>
    <p>{{resignationReason}}</p>
    <p>{{gratitudeNote}}</p>
    <p>{{transitionOffer}}</p>
    <p>{{closingStatement}}</p>
  </div>
  <p>Sincerely,</p>
  <img class="signature-image" src="{{signature}}" alt="Signature" />
  <p><strong>{{authorName}}</strong></p>
</div>
</body>
</html>
"""

MODERN = _HEAD.format(style="""
body { font-family: 'Helvetica Neue', Arial, sans-serif; font-size: 11pt; line-height: 1.7; color: #333; }
.page { display: flex; }
.side { width: 65mm; background: #2c3e50; color: #fff; padding: 25mm 12mm; box-sizing: border-box; }
.side .name { font-size: 18pt; font-weight: bold; border-bottom: 2px solid #3498db; padding-bottom: 1em; }
.side p { font-size: 10pt; word-wrap: break-word; }
.main { flex: 1; padding: 25mm 20mm; }
""") + """<body>
<div class="page">
  <div class="side">
    <p class="name">{{authorName}}</p>
    <p><strong>DATE OF SUBMISSION</strong><br>{{resignationDate}}</p>
    <p><strong>EMAIL</strong><br>{{authorEmail}}</p>
    <p><strong>PHONE</strong><br>{{authorPhone}}</p>
    <p><strong>LAST WORKING DAY</strong><br>{{lastWorkingDay}}</p>
  </div>
  <div class="main">
    <p><strong>{{recipientName}}</strong><br>{{recipientDesignation}}<br>{{companyName}}</p>
    <p>Dear {{recipientName}},</p>
    <p>{{resignationStatement}}</p>
    <p>{{resignationReason}}</p>
    <p>{{gratitudeNote}}</p>
    <p>{{transitionOffer}}</p>
    <p>{{closingStatement}}</p>
    <p>Best regards,</p>
    <img class="signature-image" src="{{signature}}" alt="Signature" />
    <p>{{authorName}}</p>
  </div>
</div>
</body>
</html>
"""

MINIMAL = _HEAD.format(style="""
body { font-family: Arial, sans-serif; font-size: 11pt; line-height: 1.6; }
.page { padding: 30mm 28mm; }
header { border-bottom: 1px solid #ddd; padding-bottom: 1em; margin-bottom: 2em; }
header .name { font-size: 16pt; letter-spacing: 0.05em; }
.highlight { border-left: 3px solid #999; padding-left: 1em; }
""") + """<body>
<div class="page">
  <header>
    <p class="name">{{authorName}}</p>
    <p>{{authorEmail}} | {{authorPhone}} | {{resignationDate}}</p>
  </header>
  <p><strong>{{recipientName}}</strong><br>{{recipientDesignation}}<br>{{companyName}}</p>
  <p>Subject: Resignation - {{authorName}}</p>
  <p>{{resignationStatement}}</p>
  <p class="highlight"><strong>Effective Last Day:</strong> {{lastWorkingDay}}</p>
  <p>{{resignationReason}}</p>
  <p>{{gratitudeNote}}</p>
  <p>{{transitionOffer}}</p>
  <p>{{closingStatement}}</p>
  <img class="signature-image" src="{{signature}}" alt="Signature" />
  <p><strong>{{authorName}}</strong></p>
</div>
</body>
</html>
"""

TRADITIONAL = _HEAD.format(style="""
body { font-family: 'Times New Roman', Times, serif; font-size: 12pt; line-height: 1.8; }
.page { padding: 25mm; border: 6px double #444; }
.letterhead { text-align: center; border-bottom: 1px solid #444; margin-bottom: 2em; }
.letterhead .name { font-size: 18pt; font-variant: small-caps; }
.date { text-align: right; }
""") + """<body>
<div class="page">
  <div class="letterhead">
    <p class="name">{{authorName}}</p>
    <p>{{authorEmail}} &bull; {{authorPhone}}</p>
  </div>
  <p class="date">{{resignationDate}}</p>
  <p>{{recipientName}}<br>{{recipientDesignation}}<br>{{companyName}}</p>
  <p>Dear {{recipientName}},</p>
  <p>{{resignationStatement}} I hereby confirm that my final day of service will be {{lastWorkingDay}}.</p>
  <p>{{resignationReason}}</p>
  <p>{{gratitudeNote}}</p>
  <p>{{transitionOffer}}</p>
  <p>{{closingStatement}}</p>
  <p>Yours sincerely,</p>
  <img class="signature-image" src="{{signature}}" alt="Signature" />
  <p>{{authorName}}</p>
</div>
</body>
</html>
"""

module = TemplateModule(
    slug="resignation-letter",
    title="Resignation Letter",
    fields=FIELDS,
    themes={
        "classic": CLASSIC,
        "modern": MODERN,
        "minimal": MINIMAL,
        "traditional": TRADITIONAL,
    },
)
