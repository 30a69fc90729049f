"""Default locator set for the Insider careers site.

The site's markup changes often, so every value here can be overridden from
the ``locators:`` section of the settings file. A tuple is a compound
locator whose alternatives are tried in order. Strings that start with ``/``,
``./`` or ``(`` are XPath, everything else is CSS unless it carries an
explicit ``css=``/``xpath=``/``text=`` prefix. ``{value}`` marks a template
slot; in XPath it is replaced by a quoted string literal.
"""

# --- Home page ---
HOME_COMPANY_MENU: tuple[str, ...] = (
    "//nav//a[contains(normalize-space(.), 'Company')]",
    "//a[contains(@class, 'dropdown-toggle')][contains(normalize-space(.), 'Company')]",
)
HOME_CAREERS_LINK: tuple[str, ...] = (
    "//nav//a[contains(normalize-space(.), 'Careers')]",
    "//a[contains(text(), 'Careers')]",
)

# --- Careers page sections ---
CAREERS_LOCATIONS_SECTION: tuple[str, ...] = (
    "#career-our-location",
    "//h3[contains(normalize-space(.), 'Our Locations')]/ancestor::section[1]",
)
CAREERS_TEAMS_SECTION: tuple[str, ...] = (
    "#career-find-our-calling",
    "//h3[contains(normalize-space(.), 'Find your calling')]/ancestor::section[1]",
)
CAREERS_LIFE_AT_INSIDER_SECTION: tuple[str, ...] = (
    "section.elementor-section[data-id='a8e7b90']",
    "//h2[contains(normalize-space(.), 'Life at Insider')]/ancestor::section[1]",
)

# --- QA careers page ---
QA_SEE_ALL_JOBS_BUTTON: str = "//a[contains(text(), 'See all QA jobs')]"

# --- Job listing filters ---
LOCATION_FILTER_CONTROL: tuple[str, ...] = (
    "select[name*='location']",
    "select#filter-by-location",
)
DEPARTMENT_FILTER_CONTROL: tuple[str, ...] = (
    "select[name*='department']",
    "select#filter-by-department",
)
LOCATION_FILTER_OPTION: str = "//option[contains(text(), {value})]"
DEPARTMENT_FILTER_OPTION: str = "//option[contains(text(), {value})]"
# Tier-2 fallback: any clickable element type carrying the value.
FILTER_FALLBACK_OPTION: str = (
    "//*[self::a or self::button or self::option][contains(normalize-space(.), {value})]"
)

# --- Job list ---
JOB_LIST_CONTAINER: str = "#jobs-list"
JOB_CARD: tuple[str, ...] = (
    "#jobs-list > div",
    "#jobs-list .position-list-item",
)
JOB_POSITION: str = ".//h3 | .//h4 | .//span[contains(@class, 'position')] | .//p[contains(@class, 'position')]"
JOB_DEPARTMENT: str = ".//span[contains(@class, 'department')] | .//div[contains(@class, 'department')]"
JOB_LOCATION: str = ".//span[contains(@class, 'location')] | .//div[contains(@class, 'location')]"
VIEW_ROLE_BUTTON: str = ".//a[contains(text(), 'View Role')] | .//button[contains(text(), 'View Role')]"
LOADING_INDICATOR: str = "//div[contains(@class, 'loading')] | //div[contains(@class, 'spinner')]"

# --- Lever application page ---
APPLICATION_FORM: str = "//div[contains(@class, 'application')] | //form[contains(@class, 'application')]"
