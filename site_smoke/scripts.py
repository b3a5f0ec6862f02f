"""Read-only page scripts evaluated by the site scenarios."""

NAV_LINKS = """() => Array.from(document.querySelectorAll('nav a'), item => ({
    text: item.textContent.trim(),
    href: item.href,
}))"""

META_DESCRIPTION = """() => {
    const meta = document.querySelector('meta[name="description"]');
    return meta ? meta.content : null;
}"""

NAV_VISIBLE = """() => {
    const menu = document.querySelector('nav');
    if (!menu) return false;
    const style = window.getComputedStyle(menu);
    return style.display !== 'none' && style.visibility !== 'hidden';
}"""

PERFORMANCE_TIMING = """() => {
    const timing = performance.timing || performance.getEntriesByType('navigation')[0];
    if (!timing) return null;
    return {
        loadTime: timing.loadEventEnd - timing.navigationStart,
        domContentLoaded: timing.domContentLoadedEventEnd - timing.navigationStart,
    };
}"""

VALIDATION_ERRORS = """() => Array.from(
    document.querySelectorAll('.error, .invalid-feedback, [aria-invalid="true"]'),
    el => el.textContent.trim(),
)"""

FOOTER_LINKS = """() => Array.from(document.querySelectorAll('footer a'), link => ({
    text: link.textContent.trim(),
    href: link.href,
    isVisible: window.getComputedStyle(link).display !== 'none',
}))"""

IMAGES = """() => Array.from(document.querySelectorAll('img'), img => ({
    src: img.src,
    alt: img.alt,
    hasAlt: img.hasAttribute('alt'),
    isLoaded: img.complete && img.naturalHeight !== 0,
    width: img.width,
    height: img.height,
}))"""

MENU_STATE = """() => {
    const menu = document.querySelector('nav, .mobile-menu, .menu-items');
    if (!menu) return null;
    const style = window.getComputedStyle(menu);
    return {
        display: style.display,
        visibility: style.visibility,
        opacity: style.opacity,
        transform: style.transform,
    };
}"""
